import functools

import pytest

from wildungeon.areas import Vector
from wildungeon.character import default_stats
from wildungeon.combat import Combatant, CombatComponent
from wildungeon.enemy import Enemy
from wildungeon.weapons import Weapon, WeaponType


def _component(stats=None, montage=None):
    owner = Combatant(name="hero", stats=stats)
    classes = [
        functools.partial(Weapon, damage=5.0, weapon_type=WeaponType.DAGGER, attack_montage=montage),
        functools.partial(Weapon, damage=10.0, weapon_type=WeaponType.SWORD, attack_montage=montage),
        None,
        functools.partial(Weapon, damage=15.0, weapon_type=WeaponType.SPEAR, attack_montage=montage),
    ]
    return owner, CombatComponent(owner, classes)


def test_weapons_spawn_hidden_and_owned():
    owner, combat = _component()
    assert [w.weapon_type for w in combat.weapons] == [
        WeaponType.DAGGER,
        WeaponType.SWORD,
        WeaponType.SPEAR,
    ]
    assert all(w.hidden and w.owner is owner for w in combat.weapons)
    assert combat.equipped_weapon is None


def test_equip_shows_only_chosen_weapon():
    _, combat = _component()
    combat.equip_weapon(0)
    combat.equip_weapon(2)
    assert combat.equipped_weapon is combat.weapons[2]
    assert [w.hidden for w in combat.weapons] == [True, True, False]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_equip_invalid_index_is_ignored(index):
    _, combat = _component()
    combat.equip_weapon(1)
    combat.equip_weapon(index)
    assert combat.equipped_weapon is combat.weapons[1]


def test_initialize_weapons_resets_equipment():
    _, combat = _component()
    combat.equip_weapon(1)
    old = list(combat.weapons)
    combat.initialize_weapons()
    assert combat.equipped_weapon is None
    assert all(new is not prev for new, prev in zip(combat.weapons, old))
    assert all(w.owner is None for w in old)


def test_attack_without_weapon_hits_nothing():
    _, combat = _component()
    enemy = Enemy(location=(200.0, 0.0, 0.0))
    assert combat.attack([enemy]) == []
    assert enemy.current_health == enemy.max_health


def test_attack_hits_target_in_front_only():
    owner, combat = _component(stats=default_stats(), montage="swing")
    combat.equip_weapon(1)
    front = Enemy(location=(200.0, 0.0, 0.0))
    behind = Enemy(location=(-200.0, 0.0, 0.0))
    hits = combat.attack([front, behind])
    assert hits == [(front, 10.0)]
    assert front.damage_history == [(10.0, owner)]
    assert behind.damage_history == []
    assert owner.played_montages == ["swing"]


def test_attack_edge_of_sweep_radius():
    _, combat = _component()
    combat.equip_weapon(0)
    inside = Enemy(location=(200.0, 74.0, 0.0))
    outside = Enemy(location=(200.0, 76.0, 0.0))
    hits = combat.attack([inside, outside])
    assert [target for target, _ in hits] == [inside]


def test_attack_applies_attack_modifier():
    stats = default_stats()
    stats.attack_modifier = 2.0
    _, combat = _component(stats=stats)
    combat.equip_weapon(2)
    enemy = Enemy(location=Vector(150.0, 0.0, 0.0))
    hits = combat.attack([enemy])
    assert hits[0][1] == pytest.approx(combat.weapons[2].damage * 2.0)
    assert enemy.max_health - enemy.current_health == pytest.approx(hits[0][1])


def test_attack_skips_owner_and_follows_facing():
    owner, combat = _component()
    owner.yaw = 90.0
    owner.location = Vector(0.0, 0.0, 0.0)
    combat.equip_weapon(0)
    ahead = Enemy(location=(0.0, 200.0, 0.0))
    old_front = Enemy(location=(200.0, 0.0, 0.0))
    hits = combat.attack([owner, ahead, old_front])
    assert [target for target, _ in hits] == [ahead]


def test_lethal_attack_destroys_and_later_skipped():
    _, combat = _component()
    combat.equip_weapon(2)
    enemy = Enemy(max_health=15.0, current_health=15.0, location=(200.0, 0.0, 0.0))
    combat.attack([enemy])
    assert enemy.destroyed
    assert combat.attack([enemy]) == []