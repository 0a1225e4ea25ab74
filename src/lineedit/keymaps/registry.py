"""Store of editing actions and the key bindings that trigger them.

Bindings are indexed by ``(mode, key signature)`` so a chord that is
already taken in a mode is found without scanning. Every change bumps
:attr:`KeymapRegistry.revision`; resolvers compare it to decide when to
rebuild their lookup trees.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from typing import ContextManager, DefaultDict, Dict, Iterable, Iterator, Optional

from lineedit.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding

ChordKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding would share a chord with an active binding."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken_by = ", ".join(conflict.id for conflict in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.key_signature}) clashes with {taken_by}"
        )


class KeymapRegistry:
    """Owns the actions and bindings shared by every key scheme."""

    def __init__(self, *, logger_name: str | None = "lineedit.keymaps") -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._chords: DefaultDict[ChordKey, set[str]] = defaultdict(set)
        self._logger_name = logger_name
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    # ------------------------------------------------------------------
    # Lookups

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def bindings_for_action(self, action_id: str) -> list[Binding]:
        return [b for b in self._bindings.values() if b.action_id == action_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._chords})),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Iterable[str] = ()
    ) -> list[Binding]:
        """Bindings on the same chord whose ``when`` conditions can co-occur."""

        skipped = set(ignore)
        same_chord = self._chords.get((binding.mode, binding.key_signature), set())
        return [
            self._bindings[other_id]
            for other_id in sorted(same_chord - skipped)
            if _contexts_overlap(binding, self._bindings[other_id])
        ]

    # ------------------------------------------------------------------
    # Mutation

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._span("register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it clashes with."""

        with self._span(
            "register_binding", binding_id=binding.id, mode=binding.mode
        ) as handle:
            self._require_action(binding, handle)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")
            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                self._reject(binding, conflicts, handle)
            for evicted in conflicts:
                self._discard(evicted.id)
            self._discard(binding.id)
            self._store(binding)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with self._span("unregister_binding", binding_id=binding_id):
            return self._discard(binding_id)

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        """Swap in a modified copy; the original stays if the copy is invalid."""

        with self._span("update_binding", binding_id=binding_id) as handle:
            current = self._bindings.get(binding_id)
            if current is None:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")
            updated = replace(current, **changes)  # type: ignore[arg-type]
            self._require_action(updated, handle)
            conflicts = self.detect_conflicts(updated, ignore=(binding_id,))
            if conflicts:
                self._reject(updated, conflicts, handle)
            self._discard(binding_id)
            self._store(updated)
            return updated

    # ------------------------------------------------------------------
    # Internals

    def _span(self, operation: str, **metadata: object) -> ContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=dict(metadata),
        )

    def _require_action(self, binding: Binding, handle: SpanHandle) -> None:
        if binding.action_id in self._actions:
            return
        handle.add_metadata("missing_action", binding.action_id)
        raise KeyError(
            f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
        )

    def _reject(
        self, binding: Binding, conflicts: list[Binding], handle: SpanHandle
    ) -> None:
        handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
        raise KeymapConflictError(binding, conflicts)

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._chords[(binding.mode, binding.key_signature)].add(binding.id)
        self._revision += 1

    def _discard(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is None:
            return None
        chord = (binding.mode, binding.key_signature)
        self._chords[chord].discard(binding_id)
        if not self._chords[chord]:
            del self._chords[chord]
        self._revision += 1
        return binding


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Whether both bindings could fire for the same flag values.

    Unconditioned bindings only clash with each other; on a shared chord an
    unconditioned binding is the fallback for the conditioned ones.
    """

    if not left.when or not right.when:
        return not left.when and not right.when
    left_map, right_map = left.when_map, right.when_map
    for flag, expected in left_map.items():
        if right_map.get(flag, expected) != expected:
            return False
    return dict(left_map) == dict(right_map)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
