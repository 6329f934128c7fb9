"""Message Formatting — pure placeholder interpolation for console messages.

Invariants:
    - All functions are pure (no IO, no async)
    - "{}" placeholders are filled left to right with the given arguments
    - Placeholders without an argument stay literally in the text
    - None renders as "null" (console clients show it to the user as-is)
    - Callers localize the template BEFORE formatting

Design Decisions:
    - Positional "{}" (log-style) instead of str.format: templates come from
      catalogs and handler code, braces with names or indexes are never
      interpreted, so a template can't raise KeyError/IndexError
"""

from typing import Any

_PLACEHOLDER = "{}"


def format_message(template: str, *args: Any) -> str:
    """Fill the "{}" placeholders in `template` with `args`."""
    if not args or _PLACEHOLDER not in template:
        return template
    parts: list[str] = []
    rest = template
    for arg in args:
        head, found, rest = rest.partition(_PLACEHOLDER)
        parts.append(head)
        if not found:
            return "".join(parts)
        parts.append(_to_text(arg))
    parts.append(rest)
    return "".join(parts)


def _to_text(value: Any) -> str:
    return "null" if value is None else str(value)
