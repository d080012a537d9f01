import pytest

from wildungeon.stats import CharacterStats


def test_fresh_stats_have_zero_stamina_and_report_drained():
    stats = CharacterStats()
    assert stats.drain_stamina(1.0) is True
    assert stats.current_stamina == 0.0


def test_drain_stamina_subtracts_amount():
    start, amount = 4.0, 1.5
    stats = CharacterStats(max_stamina=8.0, current_stamina=start)
    assert stats.drain_stamina(amount) is False
    assert stats.current_stamina == start - amount


def test_drain_stamina_can_go_below_zero_once():
    stats = CharacterStats(max_stamina=8.0, current_stamina=0.25)
    assert stats.drain_stamina(1.0) is False
    assert stats.current_stamina < 0
    assert stats.drain_stamina(1.0) is True


def test_drain_stamina_when_exhausted_leaves_value_alone():
    stats = CharacterStats(current_stamina=-0.5)
    assert stats.drain_stamina(2.0) is True
    assert stats.current_stamina == -0.5


def test_recover_stamina_adds_rate():
    stats = CharacterStats(max_stamina=8.0, current_stamina=2.0, stamina_recovery_rate=0.5)
    assert stats.recover_stamina() is False
    assert stats.current_stamina == 2.0 + 0.5


def test_recover_stamina_reports_full():
    stats = CharacterStats(max_stamina=8.0, current_stamina=8.0, stamina_recovery_rate=0.5)
    assert stats.recover_stamina() is True
    assert stats.current_stamina == 8.0


def test_recover_until_full_reaches_maximum():
    stats = CharacterStats(max_stamina=2.0, current_stamina=0.0, stamina_recovery_rate=0.5)
    ticks = 0
    while not stats.recover_stamina():
        ticks += 1
        assert ticks < 100
    assert stats.current_stamina >= stats.max_stamina


def test_increase_system_exposure_below_max_steps_down():
    stats = CharacterStats(max_system_exposure=10.0, current_system_exposure=4.0)
    assert stats.increase_system_exposure() is False
    assert stats.current_system_exposure == 4.0 - 1.0


def test_increase_system_exposure_at_max():
    stats = CharacterStats(max_system_exposure=10.0, current_system_exposure=10.0)
    assert stats.increase_system_exposure() is True
    assert stats.current_system_exposure == 10.0


@pytest.mark.parametrize("start", [50.0, 100.0])
def test_drain_health_subtracts(start):
    stats = CharacterStats(max_health=100.0, current_health=start)
    stats.drain_health(12.5)
    assert stats.current_health == start - 12.5


def test_drain_health_ignored_when_overhealed():
    stats = CharacterStats(max_health=100.0, current_health=120.0)
    stats.drain_health(30.0)
    assert stats.current_health == 120.0


def test_drain_health_does_not_touch_stamina():
    stats = CharacterStats(max_health=10.0, current_health=10.0, max_stamina=5.0, current_stamina=-3.0)
    stats.drain_health(1.0)
    assert stats.current_stamina == -3.0