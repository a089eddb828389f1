"""
Conversation history sent to the completion endpoint.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

ROLES = ("system", "user", "assistant")

EDIT_CONTEXT_TEMPLATE = (
    "Current flowchart code:\n{code}\n"
    "Please modify this based on the user's request."
)


@dataclass(frozen=True)
class Message:
    role: str
    content: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Conversation:
    """
    Ordered, append-only list of messages for one session.

    The system message is always first. Every append returns a new
    conversation and leaves this one untouched.
    """

    messages: Tuple[Message, ...] = field(default_factory=tuple)

    @classmethod
    def start(cls, system_prompt: str) -> "Conversation":
        return cls((Message("system", system_prompt),))

    def append_user(self, text: str) -> "Conversation":
        return self.extend([Message("user", text)])

    def append_assistant(self, text: str) -> "Conversation":
        return self.extend([Message("assistant", text)])

    def extend(self, messages: Iterable[Message]) -> "Conversation":
        new_messages = tuple(messages)
        if any(m.role == "system" for m in new_messages):
            raise ValueError("Only the opening message may be a system message")
        return Conversation(self.messages + new_messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self):
        return iter(self.messages)


def edit_context_message(current_code: str) -> Message:
    """Assistant message asking the model to edit the existing flowchart."""
    return Message("assistant", EDIT_CONTEXT_TEMPLATE.format(code=current_code))


def build_request_messages(
    history: Conversation, current_code: str, user_text: str
) -> List[Message]:
    """
    Build the messages for the next completion request.

    The new user message is appended to the history. When a diagram already
    exists, its code follows as an assistant message so the model edits it
    instead of starting over.

    Args:
        history: Conversation so far
        current_code: Current diagram source, empty if none was generated yet
        user_text: The new user request

    Returns:
        list: Messages in the order they are sent
    """
    messages = list(history.messages)
    messages.append(Message("user", user_text))
    if current_code:
        messages.append(edit_context_message(current_code))
    return messages
