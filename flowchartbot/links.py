"""
Share links for a flowchart on the public Mermaid services.
"""

import base64
import json

from shiny import ui

MERMAID_INK_BASE = "https://mermaid.ink/img/"
MERMAID_LIVE_BASE = "https://mermaid.live/edit#base64:"


def base64_to_base64url(base64_str: str) -> str:
    """Convert base64 to base64url encoding."""
    return base64_str.replace("+", "-").replace("/", "_").rstrip("=")


def _encode(text: str) -> str:
    return base64_to_base64url(base64.b64encode(text.encode("utf-8")).decode("utf-8"))


def mermaid_ink_url(code: str) -> str:
    return MERMAID_INK_BASE + _encode(code)


def mermaid_live_url(code: str) -> str:
    state = json.dumps({"code": code, "mermaid": {"theme": "neutral"}})
    return MERMAID_LIVE_BASE + _encode(state)


def _link_row(title: str, description: str, url: str) -> ui.Tag:
    return ui.div(
        {"class": "mb-3"},
        ui.h6(title),
        ui.p({"class": "small text-muted"}, description),
        ui.div(
            {"class": "input-group mb-2"},
            ui.tags.input(
                type="text",
                class_="form-control font-monospace small",
                value=url,
                readonly=True,
                onclick="this.select()",
            ),
            ui.tags.a(
                "Open",
                href=url,
                target="_blank",
                rel="noopener",
                class_="btn btn-primary",
            ),
        ),
    )


def external_links_content(code: str) -> ui.TagList:
    """Modal body listing the share links for ``code``."""
    return ui.TagList(
        _link_row(
            "Mermaid Ink (Image)",
            "Direct link to a PNG image, handy for embedding in documents",
            mermaid_ink_url(code),
        ),
        _link_row(
            "Mermaid Live Editor",
            "Interactive editor for viewing and editing the flowchart",
            mermaid_live_url(code),
        ),
    )
