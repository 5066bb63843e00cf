from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from paradis.application.dtos import (
    BattleStatsView,
    CombatantView,
    HealEvent,
    HelpOutcome,
    TurnResult,
)
from paradis.application.services.balance_tables import (
    ESCAPE_CHANCE,
    HEAL_CHANCE,
    MAX_HEAL,
    MAX_HELP_REQUESTS,
    MINIMUM_HEAL,
    check_help_left,
)
from paradis.application.services.battle_flavour import NarrativeProvider
from paradis.domain.errors import ContentNotFoundError
from paradis.domain.events import AttackLanded, CombatantHealed, ComradeHelpResolved, SessionEnded
from paradis.domain.models.combatant import Combatant, Comrade
from paradis.domain.models.location import MissionLocation
from paradis.domain.repositories import RANDOM_CHOICE, ComradeRepository


logger = logging.getLogger(__name__)


class BattleAction(int, Enum):
    FIGHT = 1
    ASK_HELP = 2
    ESCAPE = 3
    QUIT = 0

    @classmethod
    def from_choice(cls, choice: Optional[int]) -> "BattleAction":
        """Anything that is not 1, 2 or 3 counts as quitting."""
        if choice in (1, 2, 3):
            return cls(choice)
        return cls.QUIT


class BattleOutcome(str, Enum):
    PLAYER_WINS = "player_wins"
    ENEMY_WINS = "enemy_wins"
    MUTUAL_DEFEAT = "mutual_defeat"
    ESCAPED = "escaped"
    USER_QUIT = "user_quit"


@dataclass
class BattleState:
    player: Combatant
    enemy: Combatant
    location: MissionLocation
    help_requests_used: int = 0
    comrade: Optional[Comrade] = None
    turn: int = 0
    outcome: Optional[BattleOutcome] = None

    @property
    def help_left(self) -> int:
        return check_help_left(self.help_requests_used)

    @property
    def is_over(self) -> bool:
        return self.outcome is not None


def evaluate_outcome(player: Combatant, enemy: Combatant) -> Optional[BattleOutcome]:
    if player.is_defeated and enemy.is_defeated:
        return BattleOutcome.MUTUAL_DEFEAT
    if player.is_defeated:
        return BattleOutcome.ENEMY_WINS
    if enemy.is_defeated:
        return BattleOutcome.PLAYER_WINS
    return None


class BattleService:
    def __init__(
        self,
        comrade_repo: ComradeRepository,
        narrative: Optional[NarrativeProvider] = None,
        rng: random.Random | None = None,
        event_publisher: Optional[Callable[[object], None]] = None,
    ) -> None:
        self.comrade_repo = comrade_repo
        self.narrative = narrative or NarrativeProvider()
        self.rng = rng or random.Random()
        self.event_publisher = event_publisher

    def _publish(self, event: object) -> None:
        if self.event_publisher is not None:
            self.event_publisher(event)

    def stats_view(self, state: BattleState) -> BattleStatsView:
        def _view(combatant: Combatant) -> CombatantView:
            return CombatantView(
                name=combatant.name,
                hp=combatant.hp,
                attack_points=combatant.attack_points,
                affiliation=combatant.affiliation.popular_name,
            )

        return BattleStatsView(
            player=_view(state.player),
            enemy=_view(state.enemy),
            location_name=state.location.name,
            help_left=state.help_left,
            turn=state.turn,
        )

    def take_turn(self, state: BattleState, action: BattleAction, comrade_name: str = RANDOM_CHOICE) -> TurnResult:
        if state.is_over:
            raise RuntimeError(f"battle already ended with {state.outcome.value}")

        if action is BattleAction.FIGHT:
            return self.fight(state)
        if action is BattleAction.ASK_HELP:
            if state.help_left == 0:
                return self.help_exhausted(state)
            return self.ask_help(state, comrade_name)
        if action is BattleAction.ESCAPE:
            return self.escape(state)
        return self.quit(state)

    def _strike(self, attacker: Combatant, target: Combatant) -> int:
        damage = attacker.attack_points
        target.receive_damage(damage)
        logger.debug("%s hits %s for %d (hp now %d)", attacker.name, target.name, damage, target.hp)
        self._publish(AttackLanded(attacker=attacker.name, target=target.name, damage=damage, target_hp_after=target.hp))
        return damage

    def _roll_heal(self, combatant: Combatant) -> Optional[HealEvent]:
        if self.rng.random() >= HEAL_CHANCE:
            return None
        amount = self.rng.randrange(MAX_HEAL)
        if amount == 0:
            amount = MINIMUM_HEAL
        gained = combatant.receive_heal(amount)
        self._publish(CombatantHealed(name=combatant.name, amount=gained, hp_after=combatant.hp))
        return HealEvent(name=combatant.name, amount=gained, hp_after=combatant.hp)

    def fight(self, state: BattleState) -> TurnResult:
        state.turn += 1
        result = TurnResult(action=BattleAction.FIGHT.name.lower())

        damage = self._strike(state.player, state.enemy)
        result.beats.append([self.narrative.player_attacks(), f"Player Attack Damage: {damage}"])

        if self._finish_if_decided(state, result):
            return result

        damage = self._strike(state.enemy, state.player)
        result.beats.append([self.narrative.enemy_attacks(), f"Enemy Attack Damage: {damage}"])

        if self._finish_if_decided(state, result):
            return result

        heal_lines: List[str] = []
        player_heal = self._roll_heal(state.player)
        if player_heal is not None:
            result.heals.append(player_heal)
            heal_lines.append("A healing potion has been dropped for you!")
            heal_lines.append(f"Adding {player_heal.amount} point/s to your HP...")
        enemy_heal = self._roll_heal(state.enemy)
        if enemy_heal is not None:
            result.heals.append(enemy_heal)
            heal_lines.append("Uh-oh! The enemy regenerated!")
            heal_lines.append(f"They got {enemy_heal.amount} heal point/s!")
        result.beats.append(heal_lines)

        self._finish_if_decided(state, result)
        return result

    def ask_help(self, state: BattleState, comrade_name: str = RANDOM_CHOICE) -> TurnResult:
        if state.help_requests_used >= MAX_HELP_REQUESTS:
            return self.help_exhausted(state)

        comrade = self._resolve_comrade(comrade_name)
        state.turn += 1
        state.help_requests_used += 1
        result = TurnResult(action=BattleAction.ASK_HELP.name.lower())

        state.comrade = comrade
        helped = self.rng.random() < comrade.help_chance

        if helped:
            state.enemy.receive_damage(comrade.help_points)
            result.beats.append(
                [
                    f"{comrade.name} from the {comrade.affiliation.popular_name} decided to help you!",
                    f"{comrade.name}: {comrade.quote}",
                    f"{comrade.name}'s Attack Damage: {comrade.help_points}",
                ]
            )
        else:
            result.beats.append(
                [
                    f"Sorry. {comrade.name} decided not to help you.",
                    "They said you can do it on your own. Good luck!",
                ]
            )

        result.help = HelpOutcome(
            comrade_name=comrade.name,
            affiliation_name=comrade.affiliation.popular_name,
            helped=helped,
            damage=comrade.help_points if helped else 0,
            quote=comrade.quote,
        )
        self._publish(
            ComradeHelpResolved(
                comrade=comrade.name,
                helped=helped,
                damage=result.help.damage,
                help_requests_used=state.help_requests_used,
            )
        )
        state.comrade = None
        self._finish_if_decided(state, result)
        return result

    def _resolve_comrade(self, comrade_name: str) -> Comrade:
        try:
            return self.comrade_repo.get(comrade_name)
        except ContentNotFoundError:
            logger.info("Unknown comrade %r; a random comrade answers instead", comrade_name)
            return self.comrade_repo.get(RANDOM_CHOICE)

    def help_exhausted(self, state: BattleState) -> TurnResult:
        result = TurnResult(action=BattleAction.ASK_HELP.name.lower())
        result.beats.append(["Sorry. You used up allowed number of help requests."])
        return result

    def escape(self, state: BattleState) -> TurnResult:
        state.turn += 1
        result = TurnResult(action=BattleAction.ESCAPE.name.lower(), show_stats=False)
        succeeded = self.rng.random() < ESCAPE_CHANCE
        result.escape_succeeded = succeeded
        if succeeded:
            result.outcome_message = self.narrative.escape_success()
        else:
            result.outcome_message = f"{self.narrative.escape_failed()}\nRIP, {state.player.name}"
        self._end(state, result, BattleOutcome.ESCAPED)
        return result

    def quit(self, state: BattleState) -> TurnResult:
        result = TurnResult(
            action=BattleAction.QUIT.name.lower(),
            show_stats=False,
            outcome_message="It's sad to see you go. We hope you come back!",
        )
        self._end(state, result, BattleOutcome.USER_QUIT)
        return result

    def _finish_if_decided(self, state: BattleState, result: TurnResult) -> bool:
        outcome = evaluate_outcome(state.player, state.enemy)
        if outcome is None:
            return False
        result.outcome_message = self._outcome_message(state, outcome)
        self._end(state, result, outcome)
        return True

    def _outcome_message(self, state: BattleState, outcome: BattleOutcome) -> str:
        if outcome is BattleOutcome.MUTUAL_DEFEAT:
            return f"{self.narrative.mutual_defeat()}\nRIP, mighty {state.player.name}."
        if outcome is BattleOutcome.ENEMY_WINS:
            return self.narrative.enemy_defeats_player()
        return (
            f"{self.narrative.player_defeats_enemy()}\n"
            f"The {state.player.affiliation.popular_name} is proud to have you!"
        )

    def _end(self, state: BattleState, result: TurnResult, outcome: BattleOutcome) -> None:
        state.outcome = outcome
        result.outcome = outcome.value
        logger.info("Battle at %s ended: %s after %d turn(s)", state.location.name, outcome.value, state.turn)
        self._publish(
            SessionEnded(
                player=state.player.name,
                enemy=state.enemy.name,
                outcome=outcome.value,
                turns=state.turn,
            )
        )
