import asyncio

from flowchartbot.controller import FlowchartController
from flowchartbot.renderer import (
    MERMAID_CONFIG,
    RENDER_ERROR_INPUT,
    SURFACE_ID,
    render_payload,
    renderer_head,
)


def test_mermaid_layout_options():
    assert MERMAID_CONFIG["startOnLoad"] is False
    assert MERMAID_CONFIG["theme"] == "neutral"
    assert MERMAID_CONFIG["securityLevel"] == "loose"
    assert MERMAID_CONFIG["flowchart"]["useMaxWidth"] is False
    assert MERMAID_CONFIG["flowchart"]["rankSpacing"] == 30


def test_render_payload():
    payload = render_payload("flowchart TD\nA-->B", 1.5)
    assert payload == {
        "surface": SURFACE_ID,
        "code": "flowchart TD\nA-->B",
        "scale": 1.5,
        "errorInput": RENDER_ERROR_INPUT,
    }


def test_head_sets_config():
    html = str(renderer_head())
    assert "window.flowchartbotMermaidConfig" in html
    assert "mermaid.min.js" in html


def test_zoom_redraws_cached_source_without_new_request(fake_client):
    client = fake_client("flowchart TD\nA-->B")
    controller = FlowchartController(client, "You draw flowcharts.")
    payloads = []
    controller.subscribe(
        lambda c: payloads.append(render_payload(c.diagram_source, c.scale))
    )

    asyncio.run(controller.submit("draw"))
    controller.zoom_in()
    controller.zoom_out()
    controller.zoom_out()

    assert len(client.requests) == 1
    assert [p["scale"] for p in payloads[-3:]] == [1.1, 1.0, 0.9]
    assert {p["code"] for p in payloads[-3:]} == {"flowchart TD\nA-->B"}
