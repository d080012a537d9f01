"""Weapon handling and melee attacks for a character."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from wildungeon.areas import Rotator, Vector
from wildungeon.stats import CharacterStats
from wildungeon.weapons import Weapon

log = logging.getLogger(__name__)


@dataclass
class Combatant:
    """The character that owns a combat component."""

    name: str = "Character"
    location: Vector = field(default_factory=Vector)
    yaw: float = 0.0
    stats: CharacterStats | None = None
    controller: Any = None
    played_montages: list[Any] = field(default_factory=list)

    @property
    def forward_vector(self) -> Vector:
        """Unit vector the character is facing."""
        return Rotator(yaw=self.yaw).vector()


def _as_vector(location: Any) -> Vector:
    if isinstance(location, Vector):
        return location
    x, y, z = location
    return Vector(x, y, z)


def _distance_to_segment(point: Vector, start: Vector, end: Vector) -> float:
    segment = end - start
    length_sq = segment.dot(segment)
    if length_sq == 0.0:
        return (point - start).size()
    t = min(1.0, max(0.0, (point - start).dot(segment) / length_sq))
    return (point - (start + segment * t)).size()


class CombatComponent:
    """Spawns a character's weapons, equips one and performs melee attacks.

    ``weapon_classes`` holds factories that build a :class:`Weapon`; a slot
    may be ``None`` and is then skipped.
    """

    ATTACK_START_OFFSET = 100.0
    ATTACK_LENGTH = 150.0
    ATTACK_RADIUS = 75.0

    def __init__(
        self,
        owner: Combatant | None,
        weapon_classes: Sequence[Callable[[], Weapon] | None] = (),
    ) -> None:
        self.owner = owner
        self.weapon_classes = list(weapon_classes)
        self.weapons: list[Weapon] = []
        self.equipped_weapon: Weapon | None = None
        self.stats = owner.stats if owner is not None else None
        if owner is not None:
            self.initialize_weapons()

    def initialize_weapons(self) -> None:
        """Replace the spawned weapons with fresh, hidden ones; nothing is equipped."""
        if self.owner is None:
            return
        for weapon in self.weapons:
            weapon.owner = None
        self.weapons = []
        for factory in self.weapon_classes:
            if factory is None:
                continue
            weapon = factory()
            weapon.owner = self.owner
            weapon.hidden = True
            self.weapons.append(weapon)
        self.equipped_weapon = None

    def equip_weapon(self, index: int) -> None:
        """Equip the weapon at ``index`` (0 dagger, 1 sword, 2 spear); ignore bad indices."""
        if not 0 <= index < len(self.weapons):
            return
        for weapon in self.weapons:
            weapon.hidden = True
        self.equipped_weapon = self.weapons[index]
        self.equipped_weapon.hidden = False

    def attack(self, targets: Iterable[Any]) -> list[tuple[Any, float]]:
        """Swing the equipped weapon and damage every target in its sweep.

        Targets need a ``location`` and a ``take_damage(amount, causer)``
        method. Returns each target hit with the damage dealt to it.
        """
        owner = self.owner
        weapon = self.equipped_weapon
        if weapon is None or owner is None:
            return []
        if weapon.attack_montage is not None:
            owner.played_montages.append(weapon.attack_montage)

        forward = owner.forward_vector
        start = owner.location + forward * self.ATTACK_START_OFFSET
        end = start + forward * self.ATTACK_LENGTH

        damage = weapon.damage
        if self.stats is not None:
            damage *= self.stats.attack_modifier

        hits: list[tuple[Any, float]] = []
        for target in targets:
            if target is owner or getattr(target, "destroyed", False):
                continue
            reach = self.ATTACK_RADIUS + getattr(target, "radius", 0.0)
            if _distance_to_segment(_as_vector(target.location), start, end) > reach:
                continue
            if damage != 0.0:
                target.take_damage(damage, owner)
            log.debug("Hit actor: %r", target)
            hits.append((target, damage))
        return hits