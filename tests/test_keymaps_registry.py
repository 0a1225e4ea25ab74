import pytest

from lineedit.keymaps import (
    EMACS_MODE,
    VIM_INSERT_MODE,
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "emacs",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("ctrl+x", "ctrl+u"),
        action_id=action_id,
        when=when,
    )


def test_keystroke_parse_normalizes_modifiers() -> None:
    assert KeyStroke.parse("ctrl+w").token == "ctrl+w"
    assert KeyStroke.parse("ctrl+alt+x").token == "alt+ctrl+x"
    assert KeyStroke.parse("alt++").token == "alt++"
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke.parse("ctrl+_").modifiers == ("ctrl",)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="emacs.cx_cu")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="emacs")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="emacs.cx_cu")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="emacs.cx_cu.duplicate"))


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="dangling"))


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding_default = make_binding(binding_id="default")
    binding_empty = make_binding(
        binding_id="empty",
        when=(WhenClause("buffer_empty"),),
    )
    binding_not_empty = make_binding(
        binding_id="not_empty",
        when=(WhenClause.parse("!buffer_empty"),),
    )

    registry.register_binding(binding_default)
    registry.register_binding(binding_empty)
    registry.register_binding(binding_not_empty)

    assert registry.stats().binding_count == 3


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_update_binding_changes_sequence() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    updated = registry.update_binding(
        "binding", sequence=make_sequence("ctrl+x", "u"), description="undo"
    )

    assert updated.sequence.tokens == ("ctrl+x", "u")
    assert updated.description == "undo"


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0


def test_load_default_keymaps_registers_both_modes() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().modes == (EMACS_MODE, VIM_INSERT_MODE)
    assert registry.get_binding("emacs.home.ctrl+a").action_id == "edit.home"
    assert registry.get_binding("vim.insert.delete_word_backward.ctrl+w")


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("history.undo",),
        include_bindings=("emacs.undo.ctrl+z",),
    )

    assert registry.stats().binding_count == 1
    assert registry.get_binding("emacs.undo.ctrl+z").action_id == "history.undo"


def test_load_default_keymaps_skips_bindings_of_excluded_actions() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_actions=("edit.transpose",))

    assert registry.bindings_for_action("edit.transpose") == []
    assert registry.bindings_for_action("edit.home")


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding.simple(
        EMACS_MODE, "ctrl+y", "history.undo", id="emacs.redo.ctrl+y"
    )

    load_default_keymaps(
        registry,
        per_mode_overrides={EMACS_MODE: (custom_binding,)},
    )

    binding = registry.get_binding("emacs.redo.ctrl+y")
    assert binding.action_id == "history.undo"


def test_load_default_keymaps_override_mode_mismatch() -> None:
    registry = KeymapRegistry()
    stray = Binding.simple(VIM_INSERT_MODE, "ctrl+k", "edit.kill_to_end")

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={EMACS_MODE: (stray,)})
