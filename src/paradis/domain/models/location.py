from __future__ import annotations

from dataclasses import dataclass

from paradis.domain.models.combatant import Combatant


@dataclass
class MissionLocation:
    name: str
    enemy: Combatant
    description: str = ""
