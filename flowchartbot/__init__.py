"""
flowchartbot - Describe a process in plain language and get a Mermaid flowchart.
"""

__version__ = "0.1.0"

from .app import flowchartbot_app
from .sanitize import sanitize_flowchart_code

__all__ = [
    "flowchartbot_app",
    "sanitize_flowchart_code",
]
