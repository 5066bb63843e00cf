from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from paradis.domain.errors import ContentNotFoundError
from paradis.domain.models.affiliation import Affiliation
from paradis.domain.models.combatant import Combatant, CombatantRole
from paradis.domain.models.location import MissionLocation
from paradis.domain.repositories import RANDOM_CHOICE, LocationRepository


@dataclass(frozen=True)
class EnemyTemplate:
    name: str
    hp: int
    attack_points: int
    affiliation: Affiliation = Affiliation.PURE_TITANS


@dataclass(frozen=True)
class LocationTemplate:
    name: str
    enemy: EnemyTemplate
    description: str = ""


DEFAULT_LOCATIONS: tuple[LocationTemplate, ...] = (
    LocationTemplate(
        name="Shiganshina District",
        enemy=EnemyTemplate("Colossal Titan", hp=120, attack_points=18, affiliation=Affiliation.TITAN_SHIFTERS),
        description="The outer gate of Wall Maria, breached once already.",
    ),
    LocationTemplate(
        name="Trost District",
        enemy=EnemyTemplate("Abnormal Titan", hp=70, attack_points=10),
        description="A southern border town crawling with stragglers.",
    ),
    LocationTemplate(
        name="Forest of Giant Trees",
        enemy=EnemyTemplate("Female Titan", hp=100, attack_points=14, affiliation=Affiliation.TITAN_SHIFTERS),
        description="Branches high enough for omni-directional gear, and someone is hunting in them.",
    ),
    LocationTemplate(
        name="Utgard Castle",
        enemy=EnemyTemplate("Beast Titan", hp=110, attack_points=16, affiliation=Affiliation.TITAN_SHIFTERS),
        description="A crumbling keep surrounded in the dead of night.",
    ),
    LocationTemplate(
        name="Stohess District",
        enemy=EnemyTemplate("Armored Titan", hp=130, attack_points=12, affiliation=Affiliation.TITAN_SHIFTERS),
        description="Wall Sina's streets, where the brigade never expected a fight.",
    ),
    LocationTemplate(
        name="Ragako Village",
        enemy=EnemyTemplate("Pure Titan", hp=60, attack_points=8),
        description="A silent village whose people never left.",
    ),
)


class InMemoryLocationRepository(LocationRepository):
    def __init__(
        self,
        locations: Optional[Dict[str, LocationTemplate]] = None,
        rng: random.Random | None = None,
        cap_healing: bool = False,
    ) -> None:
        if locations is not None:
            self._locations = dict(locations)
        else:
            self._locations = {template.name: template for template in DEFAULT_LOCATIONS}
        self._rng = rng or random.Random()
        self._cap_healing = cap_healing

    def list_names(self) -> List[str]:
        return list(self._locations.keys())

    def get_template(self, name: str) -> LocationTemplate:
        key = str(name or "").strip()
        if key == RANDOM_CHOICE:
            if not self._locations:
                raise ContentNotFoundError("location", key)
            key = self._rng.choice(self.list_names())
        template = self._locations.get(key)
        if template is None:
            raise ContentNotFoundError("location", key)
        return template

    def get(self, name: str) -> MissionLocation:
        template = self.get_template(name)
        enemy = Combatant(
            name=template.enemy.name,
            hp=template.enemy.hp,
            attack_points=template.enemy.attack_points,
            affiliation=template.enemy.affiliation,
            role=CombatantRole.ENEMY,
            hp_max=template.enemy.hp if self._cap_healing else None,
        )
        return MissionLocation(name=template.name, enemy=enemy, description=template.description)
