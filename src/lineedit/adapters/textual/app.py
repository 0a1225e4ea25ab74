"""Executable Textual app that hosts the line editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use lineedit.adapters.textual.app"
    ) from exc

from rich.markup import escape

from lineedit.buffer import BufferMirror
from lineedit.config import SCHEME_NAMES, EditorConfig
from lineedit.runtime import telemetry
from lineedit.schemes import SchemeManager

from .controller import TextualLineEditAdapter, TextualUIHooks

PROMPT = "> "


@dataclass
class UIState:
    prompt_markup: str = ""
    status_text: str = ""
    history: List[str] = field(default_factory=list)


class LineEditApp(App[None]):
    """Prompt line, status line and the lines submitted so far."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#history-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#prompt-line {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("f2", "toggle_scheme", "Switch scheme"),
    ]

    def __init__(
        self, *, config: Optional[EditorConfig] = None, text: str = ""
    ) -> None:
        super().__init__()
        self._config = config or EditorConfig.from_env()
        self._initial_text = text
        self._state = UIState()
        self.manager: SchemeManager | None = None
        self.adapter: TextualLineEditAdapter | None = None
        self._history_widget: Static | None = None
        self._prompt_widget: Static | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("lineedit.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            self._history_widget = Static("", id="history-view")
            yield self._history_widget
        self._prompt_widget = Static("", id="prompt-line")
        self._status_widget = Static("", id="status-line")
        yield self._prompt_widget
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.manager = SchemeManager.from_config(self._config, text=self._initial_text)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            submit=self._submit,
            cancel=self._cancel,
            log=self._log_line,
        )
        self.adapter = TextualLineEditAdapter(self.manager, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q", "f2"}:
            return
        result = self.adapter.handle_textual_key(event.key, event.character)
        if result.consumed:
            event.stop()

    def action_toggle_scheme(self) -> None:
        if not self.manager or not self.adapter:
            return
        names = self.manager.scheme_names
        current = names.index(self.manager.active_scheme.name)
        self.adapter.switch_scheme(names[(current + 1) % len(names)])

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.prompt_markup = PROMPT + mirror.markup
        if self._prompt_widget:
            self._prompt_widget.update(self._state.prompt_markup)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _submit(self, line: str) -> None:
        self._state.history.append(line)
        if self._history_widget:
            self._history_widget.update(
                "\n".join(escape(line) for line in self._state.history)
            )

    def _cancel(self) -> None:
        self._update_status("cancelled")

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the line editor Textual demo.")
    parser.add_argument(
        "--scheme",
        choices=SCHEME_NAMES,
        default=None,
        help="Key scheme to start with (default: $LINEEDIT_SCHEME or vim)",
    )
    parser.add_argument(
        "--max-history",
        type=int,
        default=None,
        help="Undo history depth, 0 for unbounded (default: 100)",
    )
    parser.add_argument("--text", default="", help="Initial line content")
    parser.add_argument(
        "--telemetry-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="telelog preset to configure before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry_preset:
        telemetry.configure(preset=args.telemetry_preset)
    config = EditorConfig.from_env().with_overrides(
        scheme=args.scheme, max_history=args.max_history
    )
    app = LineEditApp(config=config, text=args.text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
