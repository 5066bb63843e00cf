from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from paradis.domain.models.affiliation import Affiliation


class CombatantRole(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"
    COMRADE = "comrade"


@dataclass
class Combatant:
    name: str
    hp: int
    attack_points: int
    affiliation: Affiliation
    role: CombatantRole = CombatantRole.PLAYER
    hp_max: Optional[int] = None

    def __post_init__(self) -> None:
        if not str(self.name or "").strip():
            raise ValueError("combatant name must not be empty")
        if int(self.attack_points) <= 0:
            raise ValueError(f"attack_points must be positive, got {self.attack_points}")
        self.hp = max(int(self.hp), 0)

    @property
    def is_defeated(self) -> bool:
        return self.hp == 0

    def receive_damage(self, amount: int) -> int:
        """Apply damage, saturating at zero. Returns the HP actually lost."""

        before = self.hp
        self.hp = max(0, self.hp - max(int(amount), 0))
        return before - self.hp

    def receive_heal(self, amount: int) -> int:
        """Apply healing, respecting ``hp_max`` when one is set. Returns the HP gained."""

        before = self.hp
        healed = self.hp + max(int(amount), 0)
        if self.hp_max is not None:
            healed = min(healed, self.hp_max)
        self.hp = max(healed, before)
        return self.hp - before


@dataclass
class Comrade(Combatant):
    help_chance: float = 0.5
    help_points: int = 10
    quote: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        self.role = CombatantRole.COMRADE
        self.help_chance = min(max(float(self.help_chance), 0.0), 1.0)


def new_player(name: str, affiliation: Affiliation, *, hp: int, attack_points: int, cap_healing: bool = False) -> Combatant:
    return Combatant(
        name=name,
        hp=hp,
        attack_points=attack_points,
        affiliation=affiliation,
        role=CombatantRole.PLAYER,
        hp_max=hp if cap_healing else None,
    )
