from dataclasses import dataclass


@dataclass
class AttackLanded:
    attacker: str
    target: str
    damage: int
    target_hp_after: int


@dataclass
class CombatantHealed:
    name: str
    amount: int
    hp_after: int


@dataclass
class ComradeHelpResolved:
    comrade: str
    helped: bool
    damage: int
    help_requests_used: int


@dataclass
class SessionEnded:
    player: str
    enemy: str
    outcome: str
    turns: int
