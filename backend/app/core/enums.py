"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
"""

from enum import Enum


class Race(str, Enum):
    """Character races."""

    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, Enum):
    """Character professions."""

    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class PlayerOrder(str, Enum):
    """Sort keys accepted by the player listing."""

    ID = "ID"
    NAME = "NAME"
    EXPERIENCE = "EXPERIENCE"
    BIRTHDAY = "BIRTHDAY"
    LEVEL = "LEVEL"
