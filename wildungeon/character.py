"""Player character: movement input, camera look and stamina-driven sprinting."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from wildungeon.stats import CharacterStats

log = logging.getLogger(__name__)

_EPSILON = 1e-9


def default_stats() -> CharacterStats:
    """Stats a new player character starts with."""
    return CharacterStats(
        max_health=100.0,
        current_health=100.0,
        max_system_exposure=100.0,
        current_system_exposure=100.0,
        damage_modifier=1.0,
        max_stamina=10.0,
        current_stamina=10.0,
        stamina_recovery_rate=0.5,
        walk_speed=400.0,
        sprint_speed=800.0,
        carry_capacity=16,
        base_attack=10.0,
        attack_modifier=1.0,
    )


@dataclass
class _LoopingTimer:
    interval: float
    callback: Callable[[], None]
    elapsed: float = 0.0


class DungeonCharacter:
    """A player character driven by axis input and a stamina timer."""

    SPRINT_DRAIN_AMOUNT = 0.1
    SPRINT_DRAIN_INTERVAL = 0.1
    RECOVERY_INTERVAL = 1.0

    def __init__(self, stats: CharacterStats | None = None, has_controller: bool = True) -> None:
        self.stats = stats if stats is not None else default_stats()
        self.has_controller = has_controller

        self.capsule_radius = 42.0
        self.capsule_half_height = 96.0
        self.orient_rotation_to_movement = False
        self.rotation_rate_yaw = 540.0
        self.jump_z_velocity = 600.0
        self.air_control = 0.2
        self.max_walk_speed = self.stats.walk_speed

        self.control_pitch = 0.0
        self.control_yaw = 0.0
        self.pending_movement: tuple[float, float, float] = (0.0, 0.0, 0.0)

        self._timer: _LoopingTimer | None = None

    @property
    def stamina_timer_active(self) -> bool:
        """Whether a drain or recovery timer is running."""
        return self._timer is not None

    def _add_movement_input(self, direction: tuple[float, float, float], scale: float) -> None:
        self.pending_movement = tuple(
            p + d * scale for p, d in zip(self.pending_movement, direction)
        )

    def _yaw_radians(self) -> float:
        return math.radians(self.control_yaw)

    def move_forward(self, value: float) -> None:
        """Add movement along the controller's yaw-only forward axis."""
        if self.has_controller and value != 0.0:
            yaw = self._yaw_radians()
            self._add_movement_input((math.cos(yaw), math.sin(yaw), 0.0), value)

    def move_right(self, value: float) -> None:
        """Add movement along the controller's yaw-only right axis."""
        if self.has_controller and value != 0.0:
            yaw = self._yaw_radians()
            self._add_movement_input((-math.sin(yaw), math.cos(yaw), 0.0), value)

    def look_up(self, value: float) -> None:
        """Add pitch to the control rotation."""
        if self.has_controller and value != 0.0:
            self.control_pitch += value

    def look_right(self, value: float) -> None:
        """Add yaw to the control rotation."""
        if self.has_controller and value != 0.0:
            self.control_yaw += value

    def _set_timer(self, interval: float, callback: Callable[[], None]) -> None:
        self._timer = _LoopingTimer(interval, callback)

    def _clear_timer(self) -> None:
        self._timer = None

    def start_sprint(self) -> None:
        """Stop any stamina timer and, if stamina remains, sprint while draining it."""
        self._clear_timer()
        if self.stats.current_stamina > 0:
            log.debug("Starting sprint")
            self.max_walk_speed = self.stats.sprint_speed

            def drain() -> None:
                if self.stats.drain_stamina(self.SPRINT_DRAIN_AMOUNT):
                    self._clear_timer()
                    self.stop_sprint()

            self._set_timer(self.SPRINT_DRAIN_INTERVAL, drain)

    def stop_sprint(self) -> None:
        """Return to walking speed and recover stamina until full."""
        log.debug("Stopping sprint")
        self.max_walk_speed = self.stats.walk_speed

        def recover() -> None:
            if self.stats.recover_stamina():
                self._clear_timer()

        self._set_timer(self.RECOVERY_INTERVAL, recover)

    def advance(self, seconds: float) -> None:
        """Let ``seconds`` of game time pass, firing the stamina timer as due."""
        if seconds < 0:
            raise ValueError("cannot advance by a negative time")
        remaining = seconds
        while self._timer is not None:
            timer = self._timer
            due = timer.interval - timer.elapsed
            if due > remaining + _EPSILON:
                timer.elapsed += remaining
                return
            remaining = max(0.0, remaining - due)
            timer.elapsed = 0.0
            timer.callback()