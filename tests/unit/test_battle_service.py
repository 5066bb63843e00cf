import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from paradis.application.services.battle_flavour import NarrativeProvider
from paradis.application.services.battle_service import (
    BattleAction,
    BattleOutcome,
    BattleService,
    BattleState,
    evaluate_outcome,
)
from paradis.application.services.event_bus import EventBus
from paradis.domain.events import AttackLanded, CombatantHealed, ComradeHelpResolved, SessionEnded
from paradis.domain.models.affiliation import Affiliation
from paradis.domain.models.combatant import Combatant, CombatantRole
from paradis.domain.models.location import MissionLocation
from paradis.infrastructure.inmemory.inmemory_comrade_repo import ComradeTemplate, InMemoryComradeRepository


class ScriptedRandom:
    """Feeds pre-decided draws to the battle engine."""

    def __init__(self, floats=(), ints=()) -> None:
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self) -> float:
        return self.floats.pop(0)

    def randrange(self, stop: int) -> int:
        value = self.ints.pop(0)
        assert 0 <= value < stop
        return value

    def choice(self, seq):
        return seq[0]


def _player(hp: int = 100, attack: int = 15) -> Combatant:
    return Combatant(name="Eren", hp=hp, attack_points=attack, affiliation=Affiliation.SURVEY_CORPS)


def _enemy(hp: int = 70, attack: int = 10) -> Combatant:
    return Combatant(
        name="Abnormal Titan",
        hp=hp,
        attack_points=attack,
        affiliation=Affiliation.PURE_TITANS,
        role=CombatantRole.ENEMY,
    )


def _state(player: Combatant, enemy: Combatant, help_used: int = 0) -> BattleState:
    location = MissionLocation(name="Trost District", enemy=enemy)
    return BattleState(player=player, enemy=enemy, location=location, help_requests_used=help_used)


def _comrades(help_chance: float = 1.0, help_points: int = 25) -> InMemoryComradeRepository:
    template = ComradeTemplate(
        name="Mikasa Ackerman",
        affiliation=Affiliation.SURVEY_CORPS,
        help_chance=help_chance,
        help_points=help_points,
        quote="Fight!",
    )
    return InMemoryComradeRepository({template.name: template}, rng=random.Random(0))


class BattleServiceTests(unittest.TestCase):
    def _service(self, rng, comrades=None, publisher=None) -> BattleService:
        return BattleService(
            comrades or _comrades(),
            narrative=NarrativeProvider(rng=random.Random(5)),
            rng=rng,
            event_publisher=publisher,
        )

    def test_lethal_first_strike_wins_without_counter_attack(self) -> None:
        state = _state(_player(hp=100, attack=20), _enemy(hp=20, attack=10))
        service = self._service(ScriptedRandom())

        result = service.fight(state)

        self.assertEqual(0, state.enemy.hp)
        self.assertEqual(100, state.player.hp)
        self.assertEqual(BattleOutcome.PLAYER_WINS, state.outcome)
        self.assertEqual(BattleOutcome.PLAYER_WINS.value, result.outcome)
        self.assertEqual(1, len(result.beats))
        self.assertIn("Player Attack Damage: 20", result.messages)
        self.assertIn("proud to have you", result.outcome_message)

    def test_counter_attack_can_defeat_player(self) -> None:
        state = _state(_player(hp=5, attack=15), _enemy(hp=70, attack=10))
        service = self._service(ScriptedRandom())

        result = service.fight(state)

        self.assertEqual(0, state.player.hp)
        self.assertEqual(55, state.enemy.hp)
        self.assertEqual(BattleOutcome.ENEMY_WINS, state.outcome)
        self.assertEqual([], result.heals)

    def test_non_lethal_exchange_rolls_heals_for_both(self) -> None:
        state = _state(_player(hp=100, attack=15), _enemy(hp=70, attack=10))
        service = self._service(ScriptedRandom(floats=[0.1, 0.2], ints=[0, 7]))

        result = service.fight(state)

        self.assertIsNone(state.outcome)
        self.assertEqual(100 - 10 + 1, state.player.hp)
        self.assertEqual(70 - 15 + 7, state.enemy.hp)
        self.assertEqual([1, 7], [heal.amount for heal in result.heals])
        self.assertEqual(3, len(result.beats))
        self.assertIsNone(result.outcome)

    def test_heal_rolls_are_independent(self) -> None:
        state = _state(_player(hp=100), _enemy(hp=70))
        service = self._service(ScriptedRandom(floats=[0.9, 0.3], ints=[4]))

        result = service.fight(state)

        self.assertEqual(90, state.player.hp)
        self.assertEqual(59, state.enemy.hp)
        self.assertEqual(["Abnormal Titan"], [heal.name for heal in result.heals])

    def test_capped_heal_reports_the_hp_actually_gained(self) -> None:
        player = Combatant(
            name="Eren",
            hp=100,
            attack_points=15,
            affiliation=Affiliation.SURVEY_CORPS,
            hp_max=100,
        )
        state = _state(player, _enemy(hp=70, attack=10))
        service = self._service(ScriptedRandom(floats=[0.1, 0.9], ints=[12]))

        result = service.fight(state)

        self.assertEqual(100, state.player.hp)
        self.assertEqual([10], [heal.amount for heal in result.heals])
        self.assertIn("Adding 10 point/s to your HP...", result.messages)

    def test_seeded_fights_are_reproducible(self) -> None:
        def _run(seed: int):
            state = _state(_player(hp=100), _enemy(hp=200))
            service = self._service(random.Random(seed))
            for _ in range(5):
                service.fight(state)
            return state.player.hp, state.enemy.hp

        self.assertEqual(_run(42), _run(42))

    def test_ask_help_spends_budget_and_damages_enemy_on_success(self) -> None:
        state = _state(_player(), _enemy(hp=70))
        service = self._service(ScriptedRandom(floats=[0.5]), comrades=_comrades(help_chance=0.8, help_points=25))

        result = service.ask_help(state, "Mikasa Ackerman")

        self.assertEqual(1, state.help_requests_used)
        self.assertEqual(45, state.enemy.hp)
        self.assertTrue(result.help.helped)
        self.assertEqual(25, result.help.damage)
        self.assertIsNone(state.comrade)
        self.assertIn("Mikasa Ackerman: Fight!", result.messages)

    def test_ask_help_spends_budget_when_comrade_declines(self) -> None:
        state = _state(_player(), _enemy(hp=70))
        service = self._service(ScriptedRandom(floats=[0.95]), comrades=_comrades(help_chance=0.8))

        result = service.ask_help(state, "Random")

        self.assertEqual(1, state.help_requests_used)
        self.assertEqual(70, state.enemy.hp)
        self.assertFalse(result.help.helped)
        self.assertEqual(0, result.help.damage)

    def test_unknown_comrade_name_falls_back_to_random_comrade(self) -> None:
        state = _state(_player(), _enemy(hp=70))
        service = self._service(ScriptedRandom(floats=[0.5]), comrades=_comrades(help_chance=0.8, help_points=25))

        result = service.ask_help(state, "Nobody")

        self.assertEqual(1, state.help_requests_used)
        self.assertEqual(1, state.turn)
        self.assertEqual("Mikasa Ackerman", result.help.comrade_name)
        self.assertEqual(45, state.enemy.hp)

    def test_help_that_finishes_enemy_ends_in_victory(self) -> None:
        state = _state(_player(), _enemy(hp=20))
        service = self._service(ScriptedRandom(floats=[0.0]), comrades=_comrades(help_points=25))

        result = service.ask_help(state, "Mikasa Ackerman")

        self.assertEqual(BattleOutcome.PLAYER_WINS, state.outcome)
        self.assertEqual(BattleOutcome.PLAYER_WINS.value, result.outcome)

    def test_exhausted_help_budget_changes_nothing(self) -> None:
        state = _state(_player(hp=80), _enemy(hp=60), help_used=3)
        service = self._service(ScriptedRandom())

        result = service.take_turn(state, BattleAction.ASK_HELP, "Mikasa Ackerman")

        self.assertEqual(3, state.help_requests_used)
        self.assertEqual(80, state.player.hp)
        self.assertEqual(60, state.enemy.hp)
        self.assertIsNone(state.outcome)
        self.assertTrue(result.show_stats)
        self.assertIn("used up allowed number of help requests", result.messages[0])

    def test_help_budget_is_bounded(self) -> None:
        state = _state(_player(), _enemy(hp=500))
        service = self._service(ScriptedRandom(floats=[0.99, 0.99, 0.99]), comrades=_comrades(help_chance=0.5))

        for _ in range(5):
            service.take_turn(state, BattleAction.ASK_HELP, "Mikasa Ackerman")

        self.assertEqual(3, state.help_requests_used)
        self.assertEqual(0, state.help_left)

    def test_escape_always_ends_session(self) -> None:
        for roll, succeeded in ((0.1, True), (0.9, False)):
            state = _state(_player(hp=3), _enemy(hp=500))
            service = self._service(ScriptedRandom(floats=[roll]))

            result = service.take_turn(state, BattleAction.ESCAPE)

            self.assertEqual(BattleOutcome.ESCAPED, state.outcome)
            self.assertEqual(succeeded, result.escape_succeeded)
            self.assertFalse(result.show_stats)
        self.assertIn("RIP, Eren", result.outcome_message)

    def test_unknown_action_quits(self) -> None:
        state = _state(_player(), _enemy())
        service = self._service(ScriptedRandom())

        result = service.take_turn(state, BattleAction.from_choice(7))

        self.assertEqual(BattleOutcome.USER_QUIT, state.outcome)
        self.assertEqual("quit", result.action)

    def test_from_choice_maps_menu_numbers(self) -> None:
        self.assertIs(BattleAction.FIGHT, BattleAction.from_choice(1))
        self.assertIs(BattleAction.ASK_HELP, BattleAction.from_choice(2))
        self.assertIs(BattleAction.ESCAPE, BattleAction.from_choice(3))
        self.assertIs(BattleAction.QUIT, BattleAction.from_choice(4))
        self.assertIs(BattleAction.QUIT, BattleAction.from_choice(None))

    def test_turn_after_end_is_rejected(self) -> None:
        state = _state(_player(), _enemy())
        service = self._service(ScriptedRandom())
        service.quit(state)

        with self.assertRaises(RuntimeError):
            service.take_turn(state, BattleAction.FIGHT)

    def test_evaluate_outcome_covers_all_terminal_states(self) -> None:
        self.assertEqual(BattleOutcome.MUTUAL_DEFEAT, evaluate_outcome(_player(hp=0), _enemy(hp=0)))
        self.assertEqual(BattleOutcome.ENEMY_WINS, evaluate_outcome(_player(hp=0), _enemy(hp=5)))
        self.assertEqual(BattleOutcome.PLAYER_WINS, evaluate_outcome(_player(hp=5), _enemy(hp=0)))
        self.assertIsNone(evaluate_outcome(_player(hp=5), _enemy(hp=5)))

    def test_events_are_published_through_bus(self) -> None:
        bus = EventBus()
        seen = []
        for event_type in (AttackLanded, CombatantHealed, ComradeHelpResolved, SessionEnded):
            bus.subscribe(event_type, seen.append)
        state = _state(_player(hp=100, attack=20), _enemy(hp=40))
        service = self._service(ScriptedRandom(floats=[0.1, 0.9, 0.0], ints=[5]), publisher=bus.publish)

        service.fight(state)
        service.ask_help(state, "Mikasa Ackerman")

        kinds = [type(event).__name__ for event in seen]
        self.assertEqual(
            ["AttackLanded", "AttackLanded", "CombatantHealed", "ComradeHelpResolved", "SessionEnded"],
            kinds,
        )
        self.assertEqual("player_wins", seen[-1].outcome)
        self.assertEqual(2, seen[-1].turns)

    def test_stats_view_reflects_state(self) -> None:
        state = _state(_player(hp=64), _enemy(hp=31), help_used=1)
        view = self._service(ScriptedRandom()).stats_view(state)

        self.assertEqual(64, view.player.hp)
        self.assertEqual(31, view.enemy.hp)
        self.assertEqual(2, view.help_left)
        self.assertEqual("Trost District", view.location_name)
        self.assertEqual("Mindless", view.enemy.affiliation)


if __name__ == "__main__":
    unittest.main()
