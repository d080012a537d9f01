"""Character statistics: health, stamina, system exposure and combat modifiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass
class CharacterStats:
    """Mutable bag of a character's numeric stats.

    Every value starts at zero; callers set the ones that matter.
    """

    max_health: float = 0.0
    current_health: float = 0.0
    # Fraction of an incoming attack the character actually takes.
    damage_modifier: float = 0.0

    max_system_exposure: float = 0.0
    current_system_exposure: float = 0.0

    max_stamina: float = 0.0
    current_stamina: float = 0.0
    # Stamina regained per recovery tick.
    stamina_recovery_rate: float = 0.0
    stamina_drain_modifier: float = 0.0

    walk_speed: float = 0.0
    sprint_speed: float = 0.0

    # Number of inventory slots.
    carry_capacity: int = 0

    base_attack: float = 0.0
    # Damage multiplier per weapon type (1.10 means +10 %).
    attack_modifier: float = 0.0

    def drain_stamina(self, amount: float) -> bool:
        """Spend ``amount`` stamina.

        Returns True, without changing anything, when stamina was already
        exhausted; otherwise subtracts and returns False.
        """
        if self.current_stamina <= 0:
            return True
        log.debug("Draining stamina, current: %f", self.current_stamina)
        self.current_stamina -= amount
        return False

    def recover_stamina(self) -> bool:
        """Regain one tick of stamina.

        Returns True, without changing anything, when stamina was already
        full; otherwise adds the recovery rate and returns False.
        """
        if self.current_stamina >= self.max_stamina:
            return True
        log.debug("Recovering stamina, current: %f", self.current_stamina)
        self.current_stamina += self.stamina_recovery_rate
        return False

    def increase_system_exposure(self) -> bool:
        """Step system exposure; True once it has reached its maximum.

        Below the maximum the current value moves down by one.
        """
        if self.current_system_exposure < self.max_system_exposure:
            self.current_system_exposure -= 1.0
            return False
        return True

    def drain_health(self, amount: float) -> None:
        """Subtract ``amount`` from health while health is not above its maximum."""
        if self.current_health <= self.max_health:
            self.current_health -= amount