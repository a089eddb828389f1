"""
Errors surfaced to the user while generating or rendering a flowchart.
"""


class FlowchartError(Exception):
    """Base class for recoverable flowchart errors."""


class GenerationError(FlowchartError):
    """The completion endpoint could not produce diagram code."""


class RenderError(FlowchartError):
    """The renderer rejected the diagram code."""
