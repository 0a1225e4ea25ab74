"""Resolve typed key tokens against the bindings of one keymap mode.

Each mode gets a prefix tree of its bindings, rebuilt lazily whenever the
registry revision moves. A complete sequence wins over a longer binding
that shares its prefix; a bare prefix is reported as ``pending`` so the
scheme can hold the keys until the sequence completes or misses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Mapping, Optional, Sequence

from lineedit.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

ResolutionStatus = Literal["match", "pending", "miss"]


@dataclass(slots=True)
class _Node:
    bindings: list[Binding] = field(default_factory=list)
    children: Dict[str, "_Node"] = field(default_factory=dict)


def _build_tree(bindings: Iterable[Binding]) -> _Node:
    root = _Node()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, _Node())
        node.bindings.append(binding)
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: ResolutionStatus
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Looks up token sequences; ``context`` carries the ``when`` flags."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = "lineedit.keymaps"
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._trees: Dict[str, _Node] = {}
        self._built_at = -1

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(keys)},
        ) as handle:
            result = self._walk(self._tree(mode), keys, context or {})
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._trees.clear()
        else:
            self._trees.pop(mode, None)

    def _tree(self, mode: str) -> _Node:
        if self._registry.revision != self._built_at:
            self._trees.clear()
            self._built_at = self._registry.revision
        tree = self._trees.get(mode)
        if tree is None:
            tree = _build_tree(self._registry.iter_bindings(mode))
            self._trees[mode] = tree
        return tree

    def _walk(
        self, root: _Node, keys: tuple[str, ...], flags: Mapping[str, bool]
    ) -> ResolutionResult:
        node = root
        for depth, token in enumerate(keys):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=depth)
            node = child

        match = self._pick(node.bindings, flags)
        if match is not None:
            return ResolutionResult(status="match", match=match, consumed=len(keys))
        if node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(keys),
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=len(keys))

    def _pick(
        self, candidates: list[Binding], flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        """Highest priority binding whose ``when`` flags hold; ties by id."""

        allowed = [binding for binding in candidates if binding.allows(flags)]
        if not allowed:
            return None
        best = min(allowed, key=lambda binding: (-binding.priority, binding.id))
        return ResolutionMatch(best, self._registry.get_action(best.action_id))


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "ResolutionStatus",
]
