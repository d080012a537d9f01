"""Enemies that take damage, die and leave a drop behind."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class Enemy:
    """An enemy with health and an optional item dropped on death.

    ``drop_class`` is called as ``drop_class(location=..., owner=...)`` when
    the enemy dies; what it returns is kept in ``drops``.
    """

    max_health: float = 100.0
    current_health: float = 100.0
    location: tuple[float, float, float] = (0.0, 0.0, 0.0)
    drop_class: Callable[..., Any] | None = None
    destroyed: bool = False
    drops: list[Any] = field(default_factory=list)
    damage_history: list[tuple[float, Any]] = field(default_factory=list)

    def take_damage(self, amount: float, causer: Any = None) -> float:
        """Apply damage, capped at the remaining health; return what was applied."""
        applied = min(self.current_health, amount)
        self.current_health -= applied
        self.on_damaged(applied, causer)
        if self.current_health <= 0.0:
            self.on_death()
            self.destroyed = True
        return applied

    def on_damaged(self, amount: float, causer: Any) -> None:
        """Hook run after damage is applied; records the hit."""
        self.damage_history.append((amount, causer))

    def on_death(self) -> None:
        """Hook run when health reaches zero; spawns the drop if one is set."""
        if self.drop_class is not None:
            self.drops.append(self.drop_class(location=self.location, owner=self))