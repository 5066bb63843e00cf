from __future__ import annotations

import logging
import random
from typing import List, Optional

from paradis.application.dtos import BriefingView
from paradis.application.services.balance_tables import PLAYER_ATTACK_POINTS, PLAYER_BASE_HP
from paradis.application.services.battle_flavour import NarrativeProvider
from paradis.application.services.battle_log import BattleLog
from paradis.application.services.battle_service import BattleService, BattleState
from paradis.application.services.menu_rules import MenuResolution, resolve_menu_choice
from paradis.domain.models.affiliation import Affiliation
from paradis.domain.models.combatant import new_player
from paradis.domain.repositories import RANDOM_CHOICE, ComradeRepository, LocationRepository


logger = logging.getLogger(__name__)


class SessionService:
    """Builds a session from player choices and hands it to the battle engine."""

    def __init__(
        self,
        location_repo: LocationRepository,
        comrade_repo: ComradeRepository,
        battle_service: BattleService,
        narrative: Optional[NarrativeProvider] = None,
        rng: random.Random | None = None,
        cap_healing: bool = False,
        pacing_seconds: float = 1.0,
        battle_log: Optional[BattleLog] = None,
    ) -> None:
        self.location_repo = location_repo
        self.comrade_repo = comrade_repo
        self.battle_service = battle_service
        self.narrative = narrative or battle_service.narrative
        self.rng = rng or random.Random()
        self.cap_healing = cap_healing
        self.pacing_seconds = max(float(pacing_seconds), 0.0)
        self.battle_log = battle_log

    def affiliation_choices(self) -> List[Affiliation]:
        return Affiliation.playable()

    def location_names(self) -> List[str]:
        return self.location_repo.list_names()

    def comrade_names(self) -> List[str]:
        return self.comrade_repo.list_names() + [RANDOM_CHOICE]

    def resolve_affiliation(self, raw: object) -> MenuResolution[Affiliation]:
        resolution = resolve_menu_choice(raw, self.affiliation_choices(), self.rng)
        if resolution.substituted:
            logger.info("Invalid affiliation choice %r; assigned %s", raw, resolution.value.name)
        return resolution

    def resolve_location_name(self, raw: object) -> MenuResolution[str]:
        resolution = resolve_menu_choice(raw, self.location_names(), self.rng)
        if resolution.substituted:
            logger.info("Invalid location choice %r; assigned %s", raw, resolution.value)
        return resolution

    def resolve_comrade_name(self, raw: object) -> MenuResolution[str]:
        return resolve_menu_choice(raw, self.comrade_names(), self.rng, fallback=RANDOM_CHOICE)

    def start_session(self, player_name: str, affiliation: Affiliation, location_name: str) -> BattleState:
        name = str(player_name or "").strip() or "Nameless Cadet"
        player = new_player(
            name,
            affiliation,
            hp=PLAYER_BASE_HP,
            attack_points=PLAYER_ATTACK_POINTS,
            cap_healing=self.cap_healing,
        )
        location = self.location_repo.get(location_name)
        logger.info("Session started: %s (%s) at %s vs %s", name, affiliation.name, location.name, location.enemy.name)
        return BattleState(player=player, enemy=location.enemy, location=location)

    def briefing(self, state: BattleState) -> BriefingView:
        affiliation = state.player.affiliation
        return BriefingView(
            player_name=state.player.name,
            affiliation_line=f"{affiliation.formal_name} / {affiliation.popular_name}",
            location_name=state.location.name,
            location_description=state.location.description,
            enemy_name=state.enemy.name,
            narrative_lines=[
                self.narrative.create_player(),
                self.narrative.go_to_location(),
                self.narrative.enemy_found(),
            ],
        )
