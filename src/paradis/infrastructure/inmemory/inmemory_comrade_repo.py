from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from paradis.domain.errors import ContentNotFoundError
from paradis.domain.models.affiliation import Affiliation
from paradis.domain.models.combatant import Comrade
from paradis.domain.repositories import RANDOM_CHOICE, ComradeRepository


@dataclass(frozen=True)
class ComradeTemplate:
    name: str
    affiliation: Affiliation
    help_chance: float
    help_points: int
    quote: str
    hp: int = 100
    attack_points: int = 10


DEFAULT_COMRADES: tuple[ComradeTemplate, ...] = (
    ComradeTemplate(
        name="Levi Ackerman",
        affiliation=Affiliation.SURVEY_CORPS,
        help_chance=0.35,
        help_points=35,
        quote="Give up on your dreams and die.",
    ),
    ComradeTemplate(
        name="Mikasa Ackerman",
        affiliation=Affiliation.SURVEY_CORPS,
        help_chance=0.55,
        help_points=25,
        quote="This world is cruel, but also very beautiful.",
    ),
    ComradeTemplate(
        name="Armin Arlert",
        affiliation=Affiliation.SURVEY_CORPS,
        help_chance=0.8,
        help_points=8,
        quote="Someone who can't sacrifice anything can never change anything.",
    ),
    ComradeTemplate(
        name="Hange Zoe",
        affiliation=Affiliation.SURVEY_CORPS,
        help_chance=0.6,
        help_points=18,
        quote="If you don't try to learn what's happening, nothing will change.",
    ),
    ComradeTemplate(
        name="Hannes",
        affiliation=Affiliation.GARRISON,
        help_chance=0.5,
        help_points=12,
        quote="The walls won't hold forever. Move!",
    ),
    ComradeTemplate(
        name="Annie Leonhart",
        affiliation=Affiliation.MILITARY_POLICE,
        help_chance=0.25,
        help_points=30,
        quote="I just want to be a normal girl.",
    ),
    ComradeTemplate(
        name="Sasha Blouse",
        affiliation=Affiliation.TRAINING_CORPS,
        help_chance=0.65,
        help_points=14,
        quote="Is that a potato I see?",
    ),
)


class InMemoryComradeRepository(ComradeRepository):
    def __init__(
        self,
        comrades: Optional[Dict[str, ComradeTemplate]] = None,
        rng: random.Random | None = None,
    ) -> None:
        if comrades is not None:
            self._comrades = dict(comrades)
        else:
            self._comrades = {template.name: template for template in DEFAULT_COMRADES}
        self._rng = rng or random.Random()

    def list_names(self) -> List[str]:
        return list(self._comrades.keys())

    def get_template(self, name: str) -> ComradeTemplate:
        key = str(name or "").strip()
        if key == RANDOM_CHOICE:
            if not self._comrades:
                raise ContentNotFoundError("comrade", key)
            key = self._rng.choice(self.list_names())
        template = self._comrades.get(key)
        if template is None:
            raise ContentNotFoundError("comrade", key)
        return template

    def get(self, name: str) -> Comrade:
        template = self.get_template(name)
        return Comrade(
            name=template.name,
            hp=template.hp,
            attack_points=template.attack_points,
            affiliation=template.affiliation,
            help_chance=template.help_chance,
            help_points=template.help_points,
            quote=template.quote,
        )
