"""Dungeon generation, character stats, enemies, weapons and combat rules for a dungeon crawler."""

__version__ = "0.1.0"