"""
Server side of the Mermaid renderer.

Drawing happens in the browser (``www/flowchart-renderer.js``); this module
owns the layout options and the messages that ask the browser to redraw.
"""

import json
from pathlib import Path
from typing import Any, Dict

from shiny import ui

MERMAID_SRC = "https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.min.js"

MERMAID_CONFIG: Dict[str, Any] = {
    "startOnLoad": False,
    "theme": "neutral",
    "securityLevel": "loose",
    "flowchart": {
        "useMaxWidth": False,
        "htmlLabels": True,
        "diagramPadding": 8,
        "rankSpacing": 30,
        "nodeSpacing": 30,
    },
}

SURFACE_ID = "flowchart-surface"
RENDER_MESSAGE = "render_flowchart"
RENDER_ERROR_INPUT = "render_error"

WWW_DIR = Path(__file__).parent / "www"


def renderer_head() -> ui.TagList:
    """Tags for the page head that load mermaid.js and initialize it once."""
    config = json.dumps(MERMAID_CONFIG).replace("</", "<\\/")
    return ui.TagList(
        ui.tags.script(src=MERMAID_SRC),
        ui.tags.script(ui.HTML(f"window.flowchartbotMermaidConfig = {config};")),
        ui.include_js(WWW_DIR / "flowchart-renderer.js"),
    )


def render_surface() -> ui.Tag:
    return ui.div(
        id=SURFACE_ID,
        style=(
            "min-height: 100%; display: flex; "
            "justify-content: center; align-items: center;"
        ),
    )


def render_payload(code: str, scale: float) -> Dict[str, Any]:
    """Body of the custom message that redraws the surface."""
    return {
        "surface": SURFACE_ID,
        "code": code,
        "scale": scale,
        "errorInput": RENDER_ERROR_INPUT,
    }
