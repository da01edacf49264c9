"""RuneMetrics payloads and the merged player profile."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SKILL_NAMES: dict[int, str] = {
    0: "Attack",
    1: "Defence",
    2: "Strength",
    3: "Constitution",
    4: "Ranged",
    5: "Prayer",
    6: "Magic",
    7: "Cooking",
    8: "Woodcutting",
    9: "Fletching",
    10: "Fishing",
    11: "Firemaking",
    12: "Crafting",
    13: "Smithing",
    14: "Mining",
    15: "Herblore",
    16: "Agility",
    17: "Thieving",
    18: "Slayer",
    19: "Farming",
    20: "Runecrafting",
    21: "Hunter",
    22: "Construction",
    23: "Summoning",
    24: "Dungeoneering",
    25: "Divination",
    26: "Invention",
    27: "Archaeology",
    28: "Necromancy",
}


def skill_name(skill_id: int) -> str:
    """Name for a skill id; ids added after this table get ``Unknown(<id>)``."""
    return SKILL_NAMES.get(skill_id, f"Unknown({skill_id})")


# --- upstream payloads ---


class SkillValue(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    level: int
    xp: int = 0
    rank: int | str | None = None


class ProfilePayload(BaseModel):
    """``/profile/profile?user=..&skillvalues``. On failure only ``error`` is set."""

    model_config = ConfigDict(extra="allow")

    error: str | None = None
    name: str = ""
    combatlevel: int = 0
    totalskill: int = 0
    totalxp: int = 0
    questscomplete: int = 0
    questsstarted: int = 0
    questsnotstarted: int = 0
    skillvalues: list[SkillValue] = []


class Quest(BaseModel):
    """Quest log row; ``status`` is COMPLETED, STARTED, NOT_STARTED or whatever upstream adds."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str
    status: str
    quest_points: int = 0
    members: bool = False


class QuestsPayload(BaseModel):
    """Rows are validated one at a time by the client."""

    quests: list[dict[str, Any]] = []


# --- merged result ---


class Profile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    combat_level: int
    total_skill: int
    total_xp: int
    quests_complete: int
    quests_started: int
    quests_not_started: int
    skills: dict[str, int]
    quests: list[Quest] = []
    raw: Any | None = None
