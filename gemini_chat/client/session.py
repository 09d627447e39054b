"""Conversation session manager.

Owns the message log for a single chat, sequences sends against the backend
proxy, and keeps local storage in step with the log. Presentation layers call
the intent methods (``submit_text``, ``pick_suggested_prompt``,
``request_clear``, ``scroll_to_latest``) and re-render from the observable
attributes whenever a subscribed listener fires.

All methods are meant to run on one asyncio event loop. The transport call in
``submit_text`` is the only suspension point.
"""

import logging
import random
import string
from dataclasses import dataclass, field
from typing import Callable, Sequence

from gemini_chat.client.errors import TransportError
from gemini_chat.client.scroll import ScrollFollow, Viewport
from gemini_chat.client.storage import HistoryStore
from gemini_chat.client.transport import ChatTransport, TransportResult
from gemini_chat.models.message import ASSISTANT_ROLE, USER_ROLE, Message

logger = logging.getLogger(__name__)

SUGGESTED_PROMPTS = (
    "Explain quantum computing simply",
    "Write a short story about AI",
    "Help me debug my code",
    "What's the meaning of life?",
)

GENERIC_SEND_FAILURE = "Failed to send message"

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 11


def generate_id(taken: Sequence[str] = ()) -> str:
    """Random base-36 id, re-drawn until it is not in ``taken``."""
    while True:
        candidate = "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))
        if candidate not in taken:
            return candidate


@dataclass
class Notification:
    title: str
    message: str
    variant: str = "default"  # "default" | "destructive"
    id: str = field(default_factory=generate_id)


class SessionManager:
    def __init__(
        self,
        transport: ChatTransport,
        store: HistoryStore,
        viewport: Viewport | None = None,
    ):
        self.transport = transport
        self.store = store
        self.scroll = ScrollFollow(viewport)

        self._messages: list[Message] = []
        self.loading = False
        self.draft = ""
        self.notifications: list[Notification] = []
        self.closed = False

        self._listeners: list[Callable[[], None]] = []
        # Bumped by clear/close so that a late reply from an older turn is dropped.
        self._epoch = 0

    # --- observables ---

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def show_jump_to_latest(self) -> bool:
        return self.scroll.jump_visible(len(self._messages))

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener()

    # --- state transitions ---

    def _update(self, *, messages: list[Message] | None = None, loading: bool | None = None) -> None:
        self.scroll.capture()
        if messages is not None:
            self._messages = messages
            self._persist()
        if loading is not None:
            self.loading = loading
        self.scroll.after_change()
        self._emit()

    def _persist(self) -> None:
        try:
            self.store.save(self._messages)
        except OSError as e:
            logger.warning(f"Could not persist chat history: {e}")

    def _new_message(self, role: str, content: str) -> Message:
        taken = [m.id for m in self._messages]
        return Message(id=generate_id(taken), role=role, content=content)

    def _notify(self, title: str, message: str, variant: str = "default") -> Notification:
        notification = Notification(title=title, message=message, variant=variant)
        self.notifications.append(notification)
        self._emit()
        return notification

    # --- intents ---

    def restore(self) -> tuple[Message, ...]:
        """Replace the log with whatever the store holds (empty if nothing usable)."""
        self._update(messages=self.store.load())
        logger.debug(f"Restored {len(self._messages)} messages")
        return self.messages

    def set_draft(self, text: str) -> None:
        self.draft = text
        self._emit()

    def discard_draft(self) -> None:
        self.set_draft("")

    async def submit_text(self, text: str) -> None:
        content = text.strip()
        if not content or self.loading or self.closed:
            return

        history = list(self._messages)
        user_message = self._new_message(USER_ROLE, content)
        epoch = self._epoch
        self.draft = ""
        self._update(messages=[*history, user_message], loading=True)

        result = None
        try:
            result = await self.transport.send(content, history)
        except TransportError as e:
            result = TransportResult(error=e)
        finally:
            if result is None and not self.closed:
                self._update(loading=False)

        if self.closed:
            return
        if epoch != self._epoch:
            logger.debug("Dropping reply for a turn started before the log was cleared")
            self._update(loading=False)
            return

        if result.ok:
            assistant_message = self._new_message(ASSISTANT_ROLE, result.text)
            self._update(messages=[*self._messages, assistant_message], loading=False)
        else:
            self._update(loading=False)
            logger.info(f"Chat turn failed ({result.error.kind.value}): {result.error.message}")
            self._notify("Error", result.error.message or GENERIC_SEND_FAILURE, variant="destructive")

    async def pick_suggested_prompt(self, prompt: str) -> None:
        await self.submit_text(prompt)

    def request_clear(self) -> None:
        """Erase the log and its stored copy. Callers confirm with the user first."""
        self._epoch += 1
        self._update(messages=[])
        self.store.clear()
        self._notify("Chat cleared", "Your conversation has been deleted.")

    def dismiss(self, notification_id: str) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]
        self._emit()

    def on_scroll(self) -> None:
        self.scroll.on_scroll()
        self._emit()

    def scroll_to_latest(self) -> None:
        self.scroll.scroll_to_latest()
        self._emit()

    def close(self) -> None:
        self.closed = True
        self._epoch += 1
        self._listeners.clear()
