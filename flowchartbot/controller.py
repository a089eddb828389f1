"""
Session state for the flowchart app: prompt submission, zoom and errors.

Kept free of Shiny so the state machine can be driven directly; the app
subscribes to changes and mirrors them into reactive values.
"""

from enum import Enum
from typing import Callable, List

from .conversation import Conversation, build_request_messages
from .errors import GenerationError, RenderError
from .sanitize import sanitize_flowchart_code

MIN_SCALE = 0.1
MAX_SCALE = 2.0
ZOOM_STEP = 0.1

RENDER_ERROR_MESSAGE = "Failed to render diagram. Please check the syntax."


class RequestStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in-flight"


def clamp_scale(scale: float) -> float:
    return round(max(MIN_SCALE, min(MAX_SCALE, scale)), 2)


class FlowchartController:
    """
    Drive one session's generation cycles and view state.

    Args:
        client: Object with an async ``complete(messages)`` method
        system_prompt: Instructions that open the conversation
        keep_edit_context: Keep the "current flowchart code" message in the
            stored history after a successful request
        debug: Print diagnostics
    """

    def __init__(
        self,
        client,
        system_prompt: str,
        keep_edit_context: bool = True,
        debug: bool = False,
    ):
        self.client = client
        self.keep_edit_context = keep_edit_context
        self.debug = debug

        self.conversation = Conversation.start(system_prompt)
        self.diagram_source = ""
        self.scale = 1.0
        self.status = RequestStatus.IDLE
        self.error = None

        self._subscribers: List[Callable[["FlowchartController"], None]] = []

    @property
    def in_flight(self) -> bool:
        return self.status is RequestStatus.IN_FLIGHT

    @property
    def submit_label(self) -> str:
        if self.in_flight:
            return "Generating..."
        return "Update Diagram" if self.diagram_source else "Generate Diagram"

    @property
    def prompt_placeholder(self) -> str:
        if self.diagram_source:
            return "Describe how you want to modify the flowchart..."
        return "Describe your flowchart..."

    @property
    def scale_label(self) -> str:
        return f"{round(self.scale * 100)}%"

    def subscribe(self, callback: Callable[["FlowchartController"], None]):
        """Call ``callback`` with this controller after every state change."""
        self._subscribers.append(callback)

    def _notify(self):
        for callback in self._subscribers:
            callback(self)

    def can_submit(self, prompt: str) -> bool:
        return bool(prompt and prompt.strip()) and not self.in_flight

    async def submit(self, prompt: str) -> bool:
        """
        Run one generation cycle for ``prompt``.

        Blank prompts and prompts arriving while a request is in flight are
        ignored. A failed request records the error and leaves the
        conversation and diagram source as they were.

        Returns:
            bool: True if a new diagram source was stored
        """
        if not self.can_submit(prompt):
            if self.debug:
                print("Ignoring submission: blank prompt or request in flight")
            return False

        self.status = RequestStatus.IN_FLIGHT
        self.error = None
        self._notify()

        request = build_request_messages(
            self.conversation, self.diagram_source, prompt
        )
        if self.debug:
            print(f"Sending {len(request)} messages for prompt: {prompt}")

        try:
            raw = await self.client.complete(request)
        except GenerationError as e:
            if self.debug:
                print(f"Generation failed: {e}")
            self.error = str(e)
            return False
        else:
            code = sanitize_flowchart_code(raw.strip())
            if self.debug:
                print(f"Sanitized flowchart code:\n{code}")

            new_turns = request[len(self.conversation):]
            if not self.keep_edit_context:
                new_turns = new_turns[:1]
            self.conversation = self.conversation.extend(new_turns).append_assistant(code)
            self.diagram_source = code
            return True
        finally:
            self.status = RequestStatus.IDLE
            self._notify()

    def zoom(self, delta: float) -> float:
        self.scale = clamp_scale(self.scale + delta)
        self._notify()
        return self.scale

    def zoom_in(self) -> float:
        return self.zoom(ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.zoom(-ZOOM_STEP)

    def report_render_error(self, message: str = None) -> RenderError:
        """
        Record that the renderer rejected the current diagram source.

        The source stays stored so it can be inspected.
        """
        error = RenderError(RENDER_ERROR_MESSAGE)
        if self.debug:
            print(f"Mermaid render error: {message}")
            print(f"Diagram source:\n{self.diagram_source}")
        self.error = str(error)
        self._notify()
        return error
