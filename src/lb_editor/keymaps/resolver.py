"""Token-to-action resolution over a registry snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Caches the winning binding per token until the registry changes."""

    def __init__(self, registry: KeymapRegistry) -> None:
        self._registry = registry
        self._revision = -1
        self._table: Dict[str, ResolutionMatch] = {}

    def resolve(self, token: str) -> ResolutionResult:
        match = self._ensure_table().get(token)
        if match is None:
            return ResolutionResult(status="miss")
        return ResolutionResult(status="match", match=match)

    def _ensure_table(self) -> Dict[str, ResolutionMatch]:
        revision = self._registry.revision()
        if revision == self._revision:
            return self._table

        table: Dict[str, ResolutionMatch] = {}
        for binding in self._registry.iter_bindings():
            current = table.get(binding.token)
            if current is not None and (
                -current.binding.priority,
                current.binding.id,
            ) <= (-binding.priority, binding.id):
                continue
            action = self._registry.get_action(binding.action_id)
            table[binding.token] = ResolutionMatch(binding=binding, action=action)
        self._table = table
        self._revision = revision
        return table


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
