import pytest

from wildungeon.weapons import Weapon, WeaponType


def test_weapon_type_order_and_display_names():
    looked_up = [WeaponType(name) for name in ("Dagger", "Sword", "Spear")]
    assert looked_up == [WeaponType.DAGGER, WeaponType.SWORD, WeaponType.SPEAR]
    assert list(WeaponType) == looked_up


def test_weapon_type_lookup_by_display_name():
    assert WeaponType("Spear") is WeaponType.SPEAR


def test_unknown_weapon_type_raises():
    with pytest.raises(ValueError):
        WeaponType("Axe")


def test_new_weapon_is_a_visible_ten_damage_sword():
    weapon = Weapon()
    assert weapon.damage == 10.0
    assert weapon.weapon_type is WeaponType.SWORD
    assert weapon.attach_socket_name == "WeaponSocket"
    assert weapon.attack_montage is None
    assert weapon.hidden is False


def test_weapon_fields_can_be_set():
    weapon = Weapon(damage=4.5, weapon_type=WeaponType.DAGGER, attach_socket_name="hand_r")
    assert (weapon.damage, weapon.weapon_type, weapon.attach_socket_name) == (4.5, WeaponType.DAGGER, "hand_r")


def test_weapons_compare_by_value():
    assert Weapon(damage=3.0) == Weapon(damage=3.0)
    assert Weapon(damage=3.0) != Weapon(damage=4.0)