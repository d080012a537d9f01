"""Weapon kinds and the weapon a character can carry."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class WeaponType(enum.Enum):
    """Kinds of weapon; the value is the display name."""

    DAGGER = "Dagger"
    SWORD = "Sword"
    SPEAR = "Spear"


@dataclass
class Weapon:
    """A weapon with base damage, an attack animation and an attach socket."""

    damage: float = 10.0
    weapon_type: WeaponType = WeaponType.SWORD
    attach_socket_name: str = "WeaponSocket"
    attack_montage: Any = None
    hidden: bool = False
    owner: Any = None