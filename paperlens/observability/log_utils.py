"""
Logging helpers.

Dependencies: none
System role: Keeps user content and large payloads out of log lines
"""

from collections.abc import Mapping
from typing import Any


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Short, exception-free rendering of a value for log lines.

    Mappings show their keys and sequences their size; strings and other
    values are cut to ``max_length`` characters.
    """
    if value is None:
        return "None"
    if isinstance(value, Mapping):
        rendered = "{" + ", ".join(str(key) for key in value) + "}"
    elif isinstance(value, (list, tuple, set)):
        rendered = f"{type(value).__name__}[{len(value)}]"
    else:
        try:
            rendered = str(value)
        except Exception as e:
            return f"<unrepresentable {type(value).__name__}: {type(e).__name__}>"

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}...(+{len(rendered) - max_length} chars)"
    return rendered
