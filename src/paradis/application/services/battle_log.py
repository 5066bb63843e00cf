from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from paradis.application.services.event_bus import EventBus
from paradis.domain.events import AttackLanded, CombatantHealed, ComradeHelpResolved, SessionEnded


logger = logging.getLogger(__name__)


@dataclass
class BattleLog:
    """Running record of a session, fed by battle events."""

    damage_dealt: dict = field(default_factory=dict)
    healing: dict = field(default_factory=dict)
    help_requests: List[ComradeHelpResolved] = field(default_factory=list)
    ended: SessionEnded | None = None

    def on_attack(self, event: AttackLanded) -> None:
        self.damage_dealt[event.attacker] = self.damage_dealt.get(event.attacker, 0) + int(event.damage)
        logger.debug("attack %s -> %s: %d", event.attacker, event.target, event.damage)

    def on_heal(self, event: CombatantHealed) -> None:
        self.healing[event.name] = self.healing.get(event.name, 0) + int(event.amount)
        logger.debug("heal %s: +%d (hp %d)", event.name, event.amount, event.hp_after)

    def on_help(self, event: ComradeHelpResolved) -> None:
        self.help_requests.append(event)
        logger.debug(
            "help request %d: %s %s",
            event.help_requests_used,
            event.comrade,
            "helped" if event.helped else "declined",
        )

    def on_session_ended(self, event: SessionEnded) -> None:
        self.ended = event
        logger.info("session ended: %s vs %s -> %s in %d turn(s)", event.player, event.enemy, event.outcome, event.turns)

    def summary_lines(self) -> List[str]:
        lines = [f"{name} dealt {total} damage" for name, total in self.damage_dealt.items()]
        lines.extend(f"{name} recovered {total} HP" for name, total in self.healing.items())
        if self.help_requests:
            accepted = sum(1 for row in self.help_requests if row.helped)
            lines.append(f"Comrades answered {accepted} of {len(self.help_requests)} call(s) for help")
        if self.ended is not None:
            lines.append(f"Turns taken: {self.ended.turns}")
        return lines


def register_battle_log_handlers(event_bus: EventBus, battle_log: BattleLog | None = None) -> BattleLog:
    battle_log = battle_log or BattleLog()
    event_bus.subscribe(AttackLanded, battle_log.on_attack)
    event_bus.subscribe(CombatantHealed, battle_log.on_heal)
    event_bus.subscribe(ComradeHelpResolved, battle_log.on_help)
    event_bus.subscribe(SessionEnded, battle_log.on_session_ended)
    return battle_log
