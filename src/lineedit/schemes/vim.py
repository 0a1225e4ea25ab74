"""Modal (Vim-style) key scheme."""

from __future__ import annotations

from typing import Optional, Tuple, Union

from lineedit.actions import ActionContext
from lineedit.buffer import Buffer, BufferSnapshot
from lineedit.events import Event
from lineedit.keymaps import VIM_INSERT_MODE, KeymapResolver
from lineedit.motions import FindType, find_char, find_landing, lookup_motion
from lineedit.runtime import telemetry

from .base import KeyScheme
from .emacs import default_resolver, run_binding
from .keys import KeyInput
from .operator_pipeline import TEXT_OBJECT_KEYS, OperatorPipeline
from .vim_state import (
    FindChange,
    InsertChange,
    LastChange,
    MotionChange,
    Operator,
    RangeChange,
    ReplaceChange,
    SimpleChange,
    TextObjectChange,
    VimMode,
    with_count,
    with_typed_text,
)

INSERT_COMMANDS = frozenset("iaIAsSC")
SIMPLE_COMMANDS = frozenset("xXD")

_CURSOR_KEYS = {
    "left": Buffer.left,
    "right": Buffer.right,
    "home": Buffer.home,
    "end": Buffer.end,
}


class VimScheme(KeyScheme):
    """Normal / Insert / Operator-pending state machine.

    Counts are not multiplied: when digits are typed both before and after
    an operator, the later count replaces the earlier one (``2d3w`` deletes
    three words). Pending find, replace and text-object states take the
    next printable key literally, digits and operator letters included.
    """

    name = "vim"

    def __init__(
        self,
        *,
        resolver: Optional[KeymapResolver] = None,
        insert_keymap_mode: str = VIM_INSERT_MODE,
        logger_name: str = "lineedit.schemes.vim",
    ) -> None:
        self.resolver = resolver or default_resolver()
        self.insert_keymap_mode = insert_keymap_mode
        self.pipeline = OperatorPipeline(logger_name=logger_name)
        self._logger_name = logger_name

        self._mode = VimMode.NORMAL
        self.operator = Operator.NONE
        self.count = 0
        self._digits = ""
        self.text_object_pending = False
        self.inner = False
        self.replace_pending = False
        self.find_pending = FindType.NONE

        self.last_change: Optional[LastChange] = None
        self._insert_origin: Optional[LastChange] = None
        self._recording: Optional[str] = None
        self._session: Optional[Tuple[Buffer, BufferSnapshot]] = None

    # ------------------------------------------------------------------
    # Mode bookkeeping

    @property
    def mode(self) -> VimMode:
        return self._mode

    def in_insert_mode(self) -> bool:
        return self._mode is VimMode.INSERT

    def mode_label(self) -> str:
        return self._mode.label

    def set_mode(self, mode: Union[VimMode, str]) -> None:
        """Switch between Normal and Insert from outside the key stream.

        Leaving Insert this way keeps the cursor where it is but still
        finishes the repeat recording.
        """

        target = VimMode(mode)
        if target is VimMode.OPERATOR_PENDING:
            raise ValueError("operator-pending mode is entered with an operator key")
        self._clear_pending()
        if self._mode is VimMode.INSERT and target is VimMode.NORMAL:
            self._finish_insert()
            return
        self._set_mode(target)

    def reset(self) -> None:
        self._clear_pending()
        self._commit_session()
        self._insert_origin = None
        self._recording = None
        self._set_mode(VimMode.NORMAL)

    @property
    def recording(self) -> Optional[str]:
        """Text typed so far in a repeatable insert session, if one is open."""

        return self._recording

    def _set_mode(self, mode: VimMode) -> None:
        if mode is self._mode:
            return
        previous = self._mode
        self._mode = mode
        telemetry.record_event(
            "vim.mode",
            level="debug",
            data={"from": previous.value, "to": mode.value},
            logger_name=self._logger_name,
        )

    def _has_pending(self) -> bool:
        return (
            self.operator is not Operator.NONE
            or self.count > 0
            or bool(self._digits)
            or self.text_object_pending
            or self.replace_pending
            or self.find_pending is not FindType.NONE
        )

    def _clear_pending(self) -> None:
        self.operator = Operator.NONE
        self.count = 0
        self._digits = ""
        self.text_object_pending = False
        self.inner = False
        self.replace_pending = False
        self.find_pending = FindType.NONE
        if self._mode is VimMode.OPERATOR_PENDING:
            self._set_mode(VimMode.NORMAL)

    def _take_count(self) -> Tuple[int, bool]:
        given = self.count > 0
        count = self.count if given else 1
        self.count = 0
        self._digits = ""
        return count, given

    # ------------------------------------------------------------------
    # Dispatch

    def handle_input(self, buffer: Buffer, key: KeyInput) -> Event:
        if self._mode is VimMode.INSERT:
            return self._handle_insert(buffer, key)
        return self._handle_normal(buffer, key)

    def _handle_insert(self, buffer: Buffer, key: KeyInput) -> Event:
        token = key.token
        if token == "escape":
            self._finish_insert()
            buffer.left()
            return Event.handled()
        if token == "enter":
            return Event(consumed=True, submit=True)
        if key.printable and key.text is not None:
            buffer.insert_string(key.text)
            if self._recording is not None:
                self._recording += key.text
            return Event.handled(text_changed=True)

        context = ActionContext(
            buffer, record_history=False, flags={"buffer_empty": len(buffer) == 0}
        )
        result = self.resolver.resolve(
            self.insert_keymap_mode, (token,), context=context.flags
        )
        if result.status != "match" or result.match is None:
            return Event()

        before = len(buffer)
        event = run_binding(result.match, context)
        removed = before - len(buffer)
        if removed > 0 and self._recording:
            self._recording = self._recording[: max(0, len(self._recording) - removed)]
        return event

    def _handle_normal(self, buffer: Buffer, key: KeyInput) -> Event:
        token = key.token
        if token == "escape":
            if self._has_pending():
                self._clear_pending()
                return Event.handled()
            return Event(consumed=True, cancel=True)
        if token == "enter":
            self._clear_pending()
            return Event(consumed=True, submit=True)

        if (
            self.replace_pending
            or self.text_object_pending
            or self.find_pending is not FindType.NONE
        ):
            if not key.printable or key.text is None:
                self._clear_pending()
                return Event.handled()
            return self._complete_pending(buffer, key.text)

        if token == "ctrl+r":
            count, _ = self._take_count()
            self._clear_pending()
            return self._repeat_history(buffer, Buffer.redo, count)
        if token in _CURSOR_KEYS:
            self._clear_pending()
            _CURSOR_KEYS[token](buffer)
            return Event.handled()

        if not key.printable or key.text is None:
            if self._mode is VimMode.OPERATOR_PENDING:
                self._clear_pending()
                return Event.handled()
            self._clear_pending()
            return Event()

        ch = key.text
        if ch.isdigit() and (ch != "0" or self._digits):
            self._digits += ch
            self.count = int(self._digits)
            return Event.handled()

        if self._mode is VimMode.OPERATOR_PENDING:
            return self._handle_operator_key(buffer, ch)
        return self._handle_command(buffer, ch)

    def _handle_command(self, buffer: Buffer, ch: str) -> Event:
        motion = lookup_motion(ch)
        if motion is not None:
            count, _ = self._take_count()
            buffer.set_cursor(motion.apply(buffer.text, buffer.cursor, count))
            return Event.handled()

        operator = Operator.from_key(ch)
        if operator is not None:
            self.operator = operator
            self._digits = ""
            self._set_mode(VimMode.OPERATOR_PENDING)
            return Event.handled()

        find_type = FindType.from_key(ch)
        if find_type is not FindType.NONE:
            self.find_pending = find_type
            return Event.handled()

        if ch == "r":
            self.replace_pending = True
            return Event.handled()

        if ch == "u":
            count, _ = self._take_count()
            return self._repeat_history(buffer, Buffer.undo, count)

        if ch == ".":
            return self._repeat_last_change(buffer)

        if ch in INSERT_COMMANDS:
            count, _ = self._take_count()
            return self._apply_change(buffer, InsertChange(ch, count))

        if ch in SIMPLE_COMMANDS:
            count, _ = self._take_count()
            return self._apply_change(buffer, SimpleChange(ch, count))

        self._clear_pending()
        return Event()

    def _handle_operator_key(self, buffer: Buffer, ch: str) -> Event:
        operator = self.operator
        if ch == operator.value:
            count, _ = self._take_count()
            self._clear_pending()
            if operator is Operator.YANK:
                buffer.home()
                return Event.handled()
            return self._apply_change(buffer, SimpleChange(ch * 2, count))

        if ch in ("i", "a"):
            self.text_object_pending = True
            self.inner = ch == "i"
            return Event.handled()

        find_type = FindType.from_key(ch)
        if find_type is not FindType.NONE:
            self.find_pending = find_type
            return Event.handled()

        if lookup_motion(ch) is not None:
            count, _ = self._take_count()
            self._clear_pending()
            return self._apply_change(buffer, MotionChange(operator, ch, count))

        self._clear_pending()
        return Event.handled()

    def _complete_pending(self, buffer: Buffer, ch: str) -> Event:
        count, _ = self._take_count()
        operator = self.operator
        find_type = self.find_pending
        replace = self.replace_pending
        inner = self.inner
        self._clear_pending()

        if replace:
            return self._apply_change(buffer, ReplaceChange(ch, count))

        if find_type is not FindType.NONE:
            if operator is Operator.NONE:
                return self._find_move(buffer, find_type, ch, count)
            return self._apply_change(
                buffer, FindChange(operator, find_type, ch, count)
            )

        if ch not in TEXT_OBJECT_KEYS:
            return Event.handled()
        return self._apply_change(buffer, TextObjectChange(operator, ch, inner, count))

    # ------------------------------------------------------------------
    # Commands

    def _find_move(
        self, buffer: Buffer, find_type: FindType, target: str, count: int
    ) -> Event:
        position = find_char(buffer.text, buffer.cursor, target, find_type, count)
        if position >= 0:
            buffer.set_cursor(find_landing(buffer.cursor, position, find_type))
        return Event.handled()

    def _repeat_history(self, buffer: Buffer, step, count: int) -> Event:
        changed = False
        for _ in range(count):
            if not step(buffer):
                break
            changed = True
        return Event.handled(text_changed=changed)

    def _apply_change(
        self, buffer: Buffer, change: LastChange, replay_text: Optional[str] = None
    ) -> Event:
        """Execute ``change``; the same path serves live keys and ``.``.

        ``replay_text`` is None for live commands. For a replay it holds the
        text the recorded insert session produced, which is inserted
        directly instead of opening a new session.
        """

        if isinstance(change, ReplaceChange):
            return self._replace(buffer, change)
        if isinstance(change, InsertChange):
            before = buffer.snapshot()
            self._prepare_insert(buffer, change.command, change.count)
            return self._open_insert(buffer, change, replay_text, before)
        if isinstance(change, SimpleChange):
            return self._simple(buffer, change, replay_text)
        return self._range(buffer, change, replay_text)

    def _replace(self, buffer: Buffer, change: ReplaceChange) -> Event:
        available = len(buffer) - buffer.cursor
        if available <= 0:
            return Event.handled()
        buffer.save_state()
        for _ in range(min(change.count, available)):
            buffer.delete_forward()
            buffer.insert(change.char)
        buffer.left()
        self.last_change = change
        return Event.handled(text_changed=True)

    def _prepare_insert(self, buffer: Buffer, command: str, count: int) -> None:
        """Position (and for ``s S C`` trim) the buffer before inserting."""

        if command == "a":
            buffer.right()
        elif command == "I":
            buffer.home()
        elif command == "A":
            buffer.end()
        elif command == "s":
            for _ in range(count):
                if not buffer.delete_forward():
                    break
        elif command == "S":
            buffer.clear()
        elif command == "C":
            buffer.kill_to_end()

    def _open_insert(
        self,
        buffer: Buffer,
        change: LastChange,
        replay_text: Optional[str],
        before: BufferSnapshot,
    ) -> Event:
        """Start an insert session, or for a replay insert its text at once.

        ``before`` is the state ahead of the command that opened the
        session. It becomes the session's undo step only if the text ends
        up different.
        """

        changed = buffer.text != before.text
        if replay_text is None:
            self._insert_origin = change
            self._recording = ""
            self._session = (buffer, before)
            self._set_mode(VimMode.INSERT)
            return Event.handled(text_changed=changed)

        if replay_text:
            buffer.insert_string(replay_text)
            buffer.left()
        changed = buffer.text != before.text
        if changed:
            buffer.history.record(before)
        self.last_change = change
        return Event.handled(text_changed=changed)

    def _commit_session(self) -> None:
        if self._session is None:
            return
        buffer, before = self._session
        self._session = None
        if buffer.text != before.text:
            buffer.history.record(before)

    def _finish_insert(self) -> None:
        self._commit_session()
        if self._insert_origin is not None:
            self.last_change = with_typed_text(
                self._insert_origin, self._recording or ""
            )
        self._insert_origin = None
        self._recording = None
        self._set_mode(VimMode.NORMAL)

    def _simple(
        self, buffer: Buffer, change: SimpleChange, replay_text: Optional[str]
    ) -> Event:
        command = change.command
        if command == "cc":
            before = buffer.snapshot()
            buffer.clear()
            return self._open_insert(buffer, change, replay_text, before)

        if command == "x":
            if buffer.cursor >= len(buffer):
                return Event.handled()
            buffer.save_state()
            for _ in range(change.count):
                if not buffer.delete_forward():
                    break
        elif command == "X":
            if buffer.cursor == 0:
                return Event.handled()
            buffer.save_state()
            for _ in range(change.count):
                if not buffer.delete_backward():
                    break
        elif command == "D":
            if buffer.cursor >= len(buffer):
                return Event.handled()
            buffer.save_state()
            buffer.kill_to_end()
        elif command == "dd":
            if len(buffer) == 0:
                return Event.handled()
            buffer.save_state()
            buffer.clear()
        else:
            return Event.handled()

        self.last_change = change
        return Event.handled(text_changed=True)

    def _range(
        self, buffer: Buffer, change: RangeChange, replay_text: Optional[str]
    ) -> Event:
        plan = self.pipeline.plan(buffer, change, change.count)
        if plan is None:
            return Event.handled()
        before = buffer.snapshot()
        opens_insert = change.operator is Operator.CHANGE
        changed = self.pipeline.execute(
            buffer, plan, record_history=not opens_insert
        )
        if opens_insert:
            return self._open_insert(buffer, change, replay_text, before)
        if change.operator is Operator.DELETE and changed:
            self.last_change = change
        return Event.handled(text_changed=changed)

    def _repeat_last_change(self, buffer: Buffer) -> Event:
        count, given = self._take_count()
        self._clear_pending()
        change = self.last_change
        if change is None:
            return Event.handled()
        if given:
            change = with_count(change, count)

        telemetry.record_event(
            "vim.repeat",
            level="debug",
            data={"change": type(change).__name__, "count": change.count},
            logger_name=self._logger_name,
        )
        typed = getattr(change, "typed_text", "")
        return self._apply_change(buffer, change, replay_text=typed)


__all__ = ["VimScheme", "INSERT_COMMANDS", "SIMPLE_COMMANDS"]
