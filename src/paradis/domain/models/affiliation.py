from __future__ import annotations

from enum import Enum


class Affiliation(Enum):
    """Squad/regiment a combatant serves under.

    Each member carries a formal name and the name soldiers actually use.
    """

    SURVEY_CORPS = ("Survey Corps", "Scouting Legion")
    GARRISON = ("Garrison Regiment", "Stationary Guard")
    MILITARY_POLICE = ("Military Police Brigade", "MPs")
    TRAINING_CORPS = ("104th Training Corps", "Cadets")
    TITAN_SHIFTERS = ("Marleyan Warriors", "Titan Shifters")
    PURE_TITANS = ("Pure Titans", "Mindless")

    def __init__(self, formal_name: str, popular_name: str) -> None:
        self.formal_name = formal_name
        self.popular_name = popular_name

    def __str__(self) -> str:
        return f"{self.formal_name} ({self.popular_name})"

    @classmethod
    def playable(cls) -> list["Affiliation"]:
        return [cls.SURVEY_CORPS, cls.GARRISON, cls.MILITARY_POLICE, cls.TRAINING_CORPS]
