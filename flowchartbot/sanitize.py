"""
Clean up model output into Mermaid flowchart code.
"""

import re

FLOWCHART_HEADER = "flowchart TD"

# ``` with an optional language tag that runs to the end of its line
_FENCE = re.compile(r"```(?:[\w+.-]+(?=[ \t]*(?:\r?\n|$)))?[ \t]*\r?\n?")
_LEGACY_KEYWORD = re.compile(r"^\s*graph[ \t]+", re.IGNORECASE)
_MALFORMED_HEADER = re.compile(
    r"^flowchart\b(?:[ \t]+(?:TD|TB|BT|LR|RL))?\s*", re.IGNORECASE
)
_HEADER_WITHOUT_BREAK = re.compile(r"^(flowchart TD)([^\n])")


def strip_code_fences(text: str) -> str:
    """Remove every fenced code-block marker, opening and closing."""
    return _FENCE.sub("", text)


def sanitize_flowchart_code(raw: str) -> str:
    """
    Normalize raw completion text into code that starts with the flowchart header.

    Only the shape of the header is fixed up here; broken node or edge syntax
    is left for the renderer to reject.

    Args:
        raw: Text returned by the completion endpoint

    Returns:
        str: Code starting with ``flowchart TD`` followed by a newline
    """
    code = strip_code_fences(raw)
    code = _LEGACY_KEYWORD.sub("flowchart ", code, count=1)
    code = code.strip()

    if not code.startswith(FLOWCHART_HEADER + "\n"):
        code = _MALFORMED_HEADER.sub("", code, count=1)
        code = f"{FLOWCHART_HEADER}\n{code}"

    return _HEADER_WITHOUT_BREAK.sub(r"\1\n\2", code, count=1)
