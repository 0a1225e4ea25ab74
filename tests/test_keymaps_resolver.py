from __future__ import annotations

from lineedit.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "emacs",
    keys: tuple[str, ...] = ("ctrl+x", "ctrl+u"),
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("emacs.cx_cu")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("emacs", ("ctrl+x", "ctrl+u"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id


def test_resolver_reports_pending_for_prefix() -> None:
    binding = make_binding("emacs.cx_cu")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("emacs", ("ctrl+x",))

    assert result.status == "pending"
    assert result.next_expected == ("ctrl+u",)


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "emacs.eof",
        keys=("ctrl+d",),
        when=(WhenClause("buffer_empty"),),
        action_id="core.cancel",
    )
    registry = build_registry([gating])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("emacs", ("ctrl+d",), context={})
    assert miss.status == "miss"

    hit = resolver.resolve("emacs", ("ctrl+d",), context={"buffer_empty": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("emacs.low", keys=("ctrl+o",), action_id="core.low")
    high = make_binding(
        "emacs.high",
        keys=("ctrl+o",),
        action_id="core.high",
        when=(WhenClause("focused"),),
        priority=5,
    )
    registry = KeymapRegistry()
    for action_id in ("core.low", "core.high"):
        registry.register_action(make_action(action_id))
    registry.register_binding(low)
    registry.register_binding(high)
    resolver = KeymapResolver(registry)

    result = resolver.resolve("emacs", ("ctrl+o",), context={"focused": True})

    assert result.match is not None
    assert result.match.binding.id == "emacs.high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("emacs", ("ctrl+o",))
    assert miss.status == "miss"

    new_binding = make_binding("emacs.o", keys=("ctrl+o",), action_id="core.o")
    registry.register_action(make_action("core.o"))
    registry.register_binding(new_binding)

    match = resolver.resolve("emacs", ("ctrl+o",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id


def test_default_ctrl_d_depends_on_buffer_state() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    empty = resolver.resolve("emacs", ("ctrl+d",), context={"buffer_empty": True})
    filled = resolver.resolve("emacs", ("ctrl+d",), context={"buffer_empty": False})

    assert empty.match is not None and empty.match.action.id == "core.cancel"
    assert filled.match is not None
    assert filled.match.action.id == "edit.delete_forward"


def test_resolver_reset_drops_cached_trees() -> None:
    binding = make_binding("emacs.cx_cu")
    resolver = KeymapResolver(build_registry([binding]))
    resolver.resolve("emacs", ("ctrl+x",))

    resolver.reset("emacs")
    resolver.reset()

    assert resolver.resolve("emacs", ("ctrl+x", "ctrl+u")).status == "match"
