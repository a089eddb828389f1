"""
Flowchart generator Shiny application.
"""

from dotenv import load_dotenv
from faicons import icon_svg
from shiny import App, Inputs, Outputs, Session, reactive, render, ui

from .completion import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    CompletionClient,
)
from .controller import FlowchartController
from .links import external_links_content
from .renderer import (
    RENDER_MESSAGE,
    render_payload,
    render_surface,
    renderer_head,
)
from .utils import BASE_URL_ENV, MODEL_ENV, build_prompt, ensure_api_key, env_setting

load_dotenv()

SMALL_BUTTON = "padding: 2px 8px; font-size: 12px;"


def flowchartbot_app(
    prompt_file: str = None,
    model: str = None,
    base_url: str = None,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    keep_edit_context: bool = True,
    debug: bool = False,
) -> App:
    """
    Create the flowchart generator Shiny application.

    Args:
        prompt_file: Path to the system prompt file (defaults to bundled prompt)
        model: Model identifier (defaults to FLOWCHARTBOT_MODEL or the Groq default)
        base_url: Completion API root (defaults to FLOWCHARTBOT_BASE_URL or Groq)
        temperature: Sampling temperature
        max_tokens: Maximum completion length
        keep_edit_context: Keep the "current flowchart code" message in history
        debug: Enable debug mode

    Returns:
        Shiny App instance
    """

    api_key = ensure_api_key()
    prompt = build_prompt(prompt_file)
    model = model or env_setting(MODEL_ENV, DEFAULT_MODEL)
    base_url = base_url or env_setting(BASE_URL_ENV, DEFAULT_BASE_URL)

    # UI
    input_panel = ui.card(
        ui.card_header("Input", class_="text-center"),
        ui.input_text_area(
            "prompt",
            "",
            placeholder="Describe your flowchart...",
            rows=10,
            width="100%",
            resize="none",
        ),
        ui.output_ui("generate_button"),
        ui.output_ui("error_text"),
        ui.help_text("Tokens: ", ui.output_text("session_tokens", inline=True)),
        ui.card(
            ui.card_header("Code"),
            ui.card_body(ui.output_code("code_text", placeholder=False)),
            full_screen=True,
        ),
    )

    preview_panel = ui.card(
        ui.card_header(
            ui.div(
                ui.input_action_button(
                    "zoom_out", "", icon=icon_svg("magnifying-glass-minus"),
                    class_="btn-outline-secondary btn-sm", title="Zoom out",
                ),
                ui.output_text("scale_label", inline=True),
                ui.input_action_button(
                    "zoom_in", "", icon=icon_svg("magnifying-glass-plus"),
                    class_="btn-outline-secondary btn-sm", title="Zoom in",
                ),
                ui.input_action_button(
                    "copy_code", "Copy Code", icon=icon_svg("copy"),
                    style=SMALL_BUTTON, class_="btn-outline-secondary btn-sm ms-3",
                ),
                ui.input_action_button(
                    "external_links", "External Links",
                    icon=icon_svg("up-right-from-square"),
                    style=SMALL_BUTTON, class_="btn-outline-primary btn-sm",
                ),
                class_="d-flex gap-2 justify-content-center align-items-center",
            )
        ),
        ui.card_body(render_surface(), style="overflow: auto;"),
        full_screen=True,
    )

    app_ui = ui.page_fillable(
        ui.h1("Flowchart.ai", class_="text-center"),
        ui.layout_columns(input_panel, preview_panel, col_widths=(6, 6)),
        ui.tags.head(renderer_head()),
        title="Flowchart.ai",
        style="--bslib-spacer: 1rem;",
    )

    # Server
    def server(input: Inputs, output: Outputs, session: Session):
        client = CompletionClient(
            api_key=api_key,
            base_url=base_url,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        controller = FlowchartController(
            client, prompt, keep_edit_context=keep_edit_context, debug=debug
        )

        diagram_code = reactive.value("")
        has_diagram = reactive.value(False)
        scale = reactive.value(controller.scale)
        error = reactive.value(None)
        tokens = reactive.value(0)

        def _sync(state: FlowchartController):
            diagram_code.set(state.diagram_source)
            has_diagram.set(bool(state.diagram_source))
            scale.set(state.scale)
            error.set(state.error)
            tokens.set(client.total_tokens)

        controller.subscribe(_sync)

        @ui.bind_task_button(button_id="generate")
        @reactive.extended_task
        async def generation_task(prompt_text: str) -> bool:
            return await controller.submit(prompt_text)

        @reactive.effect
        @reactive.event(input.generate)
        def _generate():
            prompt_text = input.prompt()
            if not controller.can_submit(prompt_text):
                if debug:
                    print("Nothing to generate: prompt is blank or a request is running")
                return
            generation_task(prompt_text)

        @reactive.effect
        def _clear_prompt():
            if generation_task.result():
                ui.update_text_area("prompt", value="")

        @reactive.effect
        @reactive.event(input.zoom_in)
        def _zoom_in():
            controller.zoom_in()

        @reactive.effect
        @reactive.event(input.zoom_out)
        def _zoom_out():
            controller.zoom_out()

        # Redraw whenever the code or the zoom level changes
        @reactive.effect
        async def _render_flowchart():
            code = diagram_code()
            current_scale = scale()
            if not code:
                return
            await session.send_custom_message(
                RENDER_MESSAGE, render_payload(code, current_scale)
            )

        @reactive.effect
        @reactive.event(input.render_error)
        def _render_failed():
            details = input.render_error() or {}
            controller.report_render_error(details.get("message"))

        @reactive.effect
        def _update_placeholder():
            has_diagram()
            ui.update_text_area("prompt", placeholder=controller.prompt_placeholder)

        @reactive.effect
        @reactive.event(input.copy_code)
        async def _copy_code():
            if not diagram_code():
                ui.notification_show(
                    "No diagram code available to copy.", type="warning", duration=3
                )
                return

            await session.send_custom_message(
                "copy_to_clipboard", {"text": diagram_code()}
            )
            ui.notification_show("Code copied to clipboard!", type="message", duration=2)

        @reactive.effect
        @reactive.event(input.external_links)
        def _show_external_links():
            if not diagram_code():
                ui.notification_show(
                    "No diagram code available to generate links.",
                    type="warning",
                    duration=3,
                )
                return

            try:
                links = external_links_content(diagram_code())
            except (UnicodeError, ValueError) as e:
                if debug:
                    print(f"Error generating external links: {e}")
                ui.notification_show(
                    f"Error generating external links: {e}", type="error", duration=5
                )
                return

            ui.modal_show(
                ui.modal(
                    ui.p("Share your flowchart using these external services:"),
                    links,
                    title="External Links",
                    footer=ui.modal_button("Close"),
                    size="l",
                    easy_close=True,
                )
            )

        # Outputs
        @render.ui
        def generate_button():
            has_diagram()
            return ui.input_task_button(
                "generate",
                controller.submit_label,
                label_busy="Generating...",
                width="100%",
            )

        @render.ui
        def error_text():
            if not error():
                return ui.div()
            return ui.p(error(), class_="text-danger mt-3 mb-0")

        @render.text
        def scale_label():
            scale()
            return controller.scale_label

        @render.code
        def code_text():
            return diagram_code()

        @render.text
        def session_tokens():
            return f"{tokens()}"

    return App(app_ui, server, debug=debug)
