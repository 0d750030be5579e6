"""Building blocks of the game page: message, message list and input box."""

import inspect
from collections.abc import Awaitable, Callable

from nicegui import events, ui

from chatgame.conversation.store import Conversation
from chatgame.models.schemas import Message, Role


def render_message(message: Message) -> ui.label:
    """Render one message bubble, tagged with its role for styling."""
    role = message.role.value
    align = "justify-end" if message.role == Role.USER else "justify-start"
    with ui.row().classes(f"w-full {align}"):
        return (
            ui.label(message.content)
            .classes(f"msg msg-{role} px-4 py-3 max-w-[80%] whitespace-pre-wrap")
            .props(f"data-role={role}")
        )


class GameOutput:
    """Ordered list of message bubbles.

    Re-rendered from scratch on every change; the conversation is small
    and each render reflects one immutable snapshot.

    Attributes:
        message_labels: Bubbles of the last render, oldest first.
    """

    def __init__(self) -> None:
        self.message_labels: list[ui.label] = []
        self._scroll: ui.scroll_area | None = None
        self._container: ui.column | None = None

    def build(self) -> None:
        self._scroll = ui.scroll_area().classes("flex-grow w-full output")
        with self._scroll:
            self._container = ui.column().classes("w-full gap-3 p-4")

    def render(self, conversation: Conversation, thinking: bool = False) -> None:
        if self._container is None:
            raise RuntimeError("GameOutput.build() must run before render()")

        self._container.clear()
        with self._container:
            self.message_labels = [render_message(message) for message in conversation]
            if thinking:
                with ui.row().classes("w-full justify-start items-center gap-2 px-2"):
                    ui.spinner("dots", size="md").classes("text-gray-400")
                    ui.label("The narrator is thinking...").classes(
                        "text-sm text-gray-400 italic"
                    )
        if self._scroll is not None:
            self._scroll.scroll_to(percent=1.0)


Submit = Callable[[Message], Awaitable[None] | None]


class GameInput:
    """Text box plus send button.

    The typed text lives in ``value``, updated on every change of the
    field, so submitting only reads and clears this attribute.

    Attributes:
        value: Current text of the field.
        enabled: Whether the field and button accept input.
    """

    def __init__(self, on_submit: Submit) -> None:
        self.value = ""
        self.enabled = True
        self._on_submit = on_submit
        self._field: ui.input | None = None
        self._button: ui.button | None = None

    def build(self) -> None:
        with ui.row().classes("w-full p-4 gap-3 items-center border-t input"):
            self._field = (
                ui.input(placeholder="What do you do?", on_change=self._on_change)
                .props("borderless dense")
                .classes("flex-grow text")
                .on("keydown.enter", self.send)
            )
            self._button = (
                ui.button("send", on_click=self.send).props("unelevated").classes("send")
            )
        self.set_enabled(self.enabled)

    def _on_change(self, e: events.ValueChangeEventArguments) -> None:
        self.value = e.value or ""

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        for element in (self._field, self._button):
            if element is not None:
                element.set_enabled(enabled)

    def clear(self) -> None:
        self.value = ""
        if self._field is not None:
            self._field.value = ""

    async def send(self) -> None:
        """Emit the typed text as a user message and clear the field.

        The field is cleared before the callback runs, so it is already
        empty while the completion round is in flight.
        """
        if not self.enabled or not self.value:
            return

        message = Message.user(self.value)
        self.clear()
        result = self._on_submit(message)
        if inspect.isawaitable(result):
            await result
