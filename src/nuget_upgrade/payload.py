"""Isolate the JSON document inside noisy command output.

``dotnet list package --outdated --format json`` may print restore or
telemetry lines around the report. :func:`extract_json_payload` cuts the text
down to the span between the first ``{`` and the last ``}``.
"""

from __future__ import annotations


def extract_json_payload(text: str) -> str:
    """Return the substring from the first ``{`` to the last ``}`` inclusive.

    This is a best-effort scan, not a parser: braces in log noise after the
    real document would be included. When no such span exists the text is
    returned unchanged so the JSON decoder reports the failure.

    Args:
        text: Raw command output.

    Returns:
        The candidate JSON span, or ``text`` itself.

    Example:
        >>> extract_json_payload('info: restoring\\n{"projects": []}\\ndone')
        '{"projects": []}'
        >>> extract_json_payload("no braces here")
        'no braces here'
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return text
    return text[first : last + 1]


__all__ = ["extract_json_payload"]
