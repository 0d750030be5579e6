"""NiceGUI game page.

Composes the message list and the input box around a GameSession. The
session decides when a completion round runs; this module only renders
its snapshots and reports failures.
"""

import logging
from collections.abc import Awaitable, Callable

from nicegui import ui

from chatgame.client.completion import CompletionClient, CompletionFailure
from chatgame.conversation.prompt import get_prompt
from chatgame.conversation.session import Completer, GameSession, GameState
from chatgame.models.schemas import Message
from chatgame.ui.components import GameInput, GameOutput

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #1b1d23; min-height: 100vh; }

    .chat {
        background: #262932;
        border-radius: 12px;
        box-shadow: 0 2px 12px rgba(0, 0, 0, 0.4);
        overflow: hidden;
    }

    .msg { border-radius: 14px; font-size: 0.95rem; line-height: 1.5; }
    .msg[data-role="user"] { background: #3b5bdb; color: white; }
    .msg[data-role="assistant"] { background: #343845; color: #e9ecef; }

    .input { background: #20232a; border-color: #343845 !important; }
    .input .q-field__native { color: #e9ecef; }
</style>
"""


class Game:
    """Root component: owns the session and wires it to the view."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.output = GameOutput()
        self.input = GameInput(on_submit=self.add_message)
        self._root: ui.column | None = None
        self._retry_button: ui.button | None = None
        session.on_change(self._on_session_change)

    def build(self) -> None:
        self._root = ui.column().classes("w-full max-w-3xl mx-auto chat gap-0").style(
            "height: calc(100vh - 4rem)"
        )
        with self._root:
            self.output.build()
            with ui.row().classes("w-full justify-center py-2"):
                self._retry_button = ui.button(
                    "retry", icon="refresh", on_click=self.retry
                ).props("flat color=negative")
            self.input.build()
        self._refresh()

    def _refresh(self) -> None:
        self.output.render(self.session.conversation, thinking=self.session.in_flight)
        self.input.set_enabled(self.session.accepting_input)
        if self._retry_button is not None:
            self._retry_button.set_visibility(self.session.state == GameState.ERROR)

    def _on_session_change(self, session: GameSession) -> None:
        self._refresh()

    async def _run_round(self, action: Callable[[], Awaitable[object]]) -> None:
        try:
            await action()
        except CompletionFailure as e:
            logger.error(f"Completion round failed: {e}")
            if self._root is None:
                raise
            # Rounds may finish outside any handler, so target the page explicitly.
            with self._root:
                ui.notify(str(e), type="negative", close_button=True)

    async def add_message(self, message: Message) -> None:
        await self._run_round(lambda: self.session.submit(message))

    async def start(self) -> None:
        await self._run_round(self.session.start)

    async def retry(self) -> None:
        await self._run_round(self.session.retry)


def build_game(completer: Completer) -> Game:
    """Lay out a fresh game inside the current page and schedule its first round."""
    ui.add_head_html(CUSTOM_CSS)
    ui.page_title("Chat Game")

    game = Game(GameSession(get_prompt(), completer))
    with ui.element("div").classes("w-full min-h-screen p-4 md:p-8"):
        game.build()

    # Answer the seed prompt once the browser is connected.
    ui.timer(0.1, game.start, once=True)
    return game


@ui.page("/")
def game_page() -> None:
    """Main game page. Every visit starts a fresh conversation."""
    build_game(CompletionClient())


def main() -> None:
    ui.run(title="Chat Game", port=8080, reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
