"""Display state for the chat surface and the reducer that updates it."""

from typing import Literal

from pydantic import BaseModel, Field

from core.constants import ERROR_GLYPH
from core.models.api.requests import ConversationMessage, TextPart
from core.models.api.streaming import StreamRecord
from core.types import MessageRole, StreamRecordType
from core.utils import generate_entry_id


class StatusEntry(BaseModel):
    """Ephemeral progress chip shown while the pipeline runs."""

    id: str = Field(default_factory=lambda: generate_entry_id("status"))
    type: Literal["status"] = "status"
    content: str


DisplayEntry = StatusEntry | ConversationMessage


def _new_assistant_id() -> str:
    return generate_entry_id("assistant")


class DisplayState(BaseModel):
    """Ordered display entries plus the assistant message being built."""

    entries: list[DisplayEntry] = Field(default_factory=list)
    assistant_message_id: str = Field(default_factory=_new_assistant_id)
    buffer: str = ""

    @property
    def status_entries(self) -> list[StatusEntry]:
        return [entry for entry in self.entries if isinstance(entry, StatusEntry)]

    @property
    def messages(self) -> list[ConversationMessage]:
        """Durable conversation messages, in display order."""
        return [
            entry for entry in self.entries if isinstance(entry, ConversationMessage)
        ]


def _assistant_message(message_id: str, text: str) -> ConversationMessage:
    return ConversationMessage(
        id=message_id, role=MessageRole.ASSISTANT, parts=[TextPart(text=text)]
    )


def _without_status(entries: list[DisplayEntry]) -> list[DisplayEntry]:
    return [entry for entry in entries if not isinstance(entry, StatusEntry)]


def upsert_message(
    entries: list[DisplayEntry], message: ConversationMessage
) -> list[DisplayEntry]:
    """Replace the entry with the message's id in place, or append it."""
    updated = list(entries)
    for index, entry in enumerate(updated):
        if entry.id == message.id:
            updated[index] = message
            return updated
    updated.append(message)
    return updated


def error_message(text: str) -> ConversationMessage:
    """Assistant message shown for a failure."""
    return _assistant_message(generate_entry_id("error"), f"{ERROR_GLYPH} {text}")


def start_request(state: DisplayState, user_message: ConversationMessage) -> DisplayState:
    """Append the user's message and reset per-request assistant state."""
    return DisplayState(
        entries=[*_without_status(state.entries), user_message],
        assistant_message_id=_new_assistant_id(),
    )


def apply_record(
    state: DisplayState,
    record: StreamRecord,
    clear_status_on_error: bool = True,
) -> DisplayState:
    """Return the display state after one stream record.

    Args:
        state: Current display state (left unchanged)
        record: Next record in arrival order
        clear_status_on_error: Drop status chips when an error record arrives

    Returns:
        New display state
    """
    if record.type == StreamRecordType.STATUS:
        entries = [*state.entries, StatusEntry(content=record.content)]
        return state.model_copy(update={"entries": entries})

    if record.type == StreamRecordType.TEXT_DELTA:
        buffer = state.buffer + record.content
        entries = upsert_message(
            state.entries, _assistant_message(state.assistant_message_id, buffer)
        )
        return state.model_copy(update={"entries": entries, "buffer": buffer})

    if record.type == StreamRecordType.FINISH:
        return state.model_copy(update={"entries": _without_status(state.entries)})

    if record.type == StreamRecordType.ERROR:
        entries = list(state.entries)
        if clear_status_on_error:
            entries = _without_status(entries)
        entries.append(error_message(record.content))
        return state.model_copy(update={"entries": entries})

    return state
