import pytest

from wildungeon.character import DungeonCharacter, default_stats
from wildungeon.stats import CharacterStats


def test_default_stats_values():
    stats = default_stats()
    assert stats.max_health == 100.0
    assert stats.max_stamina == 10.0
    assert stats.stamina_recovery_rate == 0.5
    assert stats.walk_speed == 400.0
    assert stats.sprint_speed == 800.0
    assert stats.carry_capacity == 16
    assert stats.base_attack == 10.0
    assert stats.attack_modifier == 1.0
    assert stats.damage_modifier == 1.0


def test_default_stats_start_full():
    stats = default_stats()
    assert stats.current_health == stats.max_health
    assert stats.current_stamina == stats.max_stamina
    assert stats.current_system_exposure == stats.max_system_exposure


def test_character_starts_walking_without_timer():
    character = DungeonCharacter()
    assert character.max_walk_speed == character.stats.walk_speed
    assert character.stamina_timer_active is False
    assert character.capsule_radius == 42.0
    assert character.capsule_half_height == 96.0


def test_move_forward_at_zero_yaw():
    character = DungeonCharacter()
    character.move_forward(1.0)
    assert character.pending_movement == pytest.approx((1.0, 0.0, 0.0))


def test_move_forward_follows_yaw():
    character = DungeonCharacter()
    character.look_right(90.0)
    character.move_forward(2.0)
    assert character.pending_movement == pytest.approx((0.0, 2.0, 0.0), abs=1e-9)


def test_move_right_at_zero_yaw():
    character = DungeonCharacter()
    character.move_right(-1.0)
    assert character.pending_movement == pytest.approx((0.0, -1.0, 0.0))


def test_movement_ignored_without_controller():
    character = DungeonCharacter(has_controller=False)
    character.move_forward(1.0)
    character.move_right(1.0)
    character.look_up(5.0)
    character.look_right(5.0)
    assert character.pending_movement == (0.0, 0.0, 0.0)
    assert (character.control_pitch, character.control_yaw) == (0.0, 0.0)


def test_zero_input_is_ignored():
    character = DungeonCharacter()
    character.move_forward(0.0)
    assert character.pending_movement == (0.0, 0.0, 0.0)


def test_look_accumulates():
    character = DungeonCharacter()
    character.look_up(3.0)
    character.look_up(-1.0)
    character.look_right(7.0)
    assert character.control_pitch == 3.0 - 1.0
    assert character.control_yaw == 7.0


def test_start_sprint_raises_speed_and_drains():
    character = DungeonCharacter()
    character.start_sprint()
    assert character.max_walk_speed == character.stats.sprint_speed
    before = character.stats.current_stamina
    character.advance(DungeonCharacter.SPRINT_DRAIN_INTERVAL)
    assert character.stats.current_stamina == pytest.approx(before - DungeonCharacter.SPRINT_DRAIN_AMOUNT)
    assert character.stamina_timer_active is True


def test_partial_interval_does_not_drain():
    character = DungeonCharacter()
    character.start_sprint()
    character.advance(DungeonCharacter.SPRINT_DRAIN_INTERVAL / 2)
    assert character.stats.current_stamina == character.stats.max_stamina


def test_sprint_ends_when_stamina_exhausted():
    character = DungeonCharacter()
    character.start_sprint()
    character.advance(11.0)
    assert character.max_walk_speed == character.stats.walk_speed
    assert character.stats.current_stamina <= 0.0 + 1e-9
    assert character.stamina_timer_active is True


def test_recovery_stops_when_full():
    character = DungeonCharacter()
    character.start_sprint()
    character.advance(11.0)
    character.advance(30.0)
    assert character.stats.current_stamina >= character.stats.max_stamina
    assert character.stamina_timer_active is False


def test_stop_sprint_recovers_once_per_interval():
    stats = default_stats()
    stats.current_stamina = 2.0
    character = DungeonCharacter(stats)
    character.stop_sprint()
    character.advance(DungeonCharacter.RECOVERY_INTERVAL)
    assert character.stats.current_stamina == 2.0 + stats.stamina_recovery_rate


def test_start_sprint_without_stamina_does_nothing():
    stats = default_stats()
    stats.current_stamina = 0.0
    character = DungeonCharacter(stats)
    character.stop_sprint()
    character.start_sprint()
    assert character.max_walk_speed == stats.walk_speed
    assert character.stamina_timer_active is False


def test_custom_stats_are_used():
    stats = CharacterStats(walk_speed=150.0, sprint_speed=300.0, current_stamina=1.0, max_stamina=1.0)
    character = DungeonCharacter(stats)
    character.start_sprint()
    assert character.max_walk_speed == 300.0


def test_advance_negative_raises():
    with pytest.raises(ValueError):
        DungeonCharacter().advance(-1.0)