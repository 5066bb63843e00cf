from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class HealEvent:
    name: str
    amount: int
    hp_after: int


@dataclass
class HelpOutcome:
    comrade_name: str
    affiliation_name: str
    helped: bool
    damage: int
    quote: str = ""


@dataclass
class TurnResult:
    """What one battle action produced.

    ``beats`` are groups of lines the console shows between
    "press enter" pauses.
    """

    action: str
    beats: List[List[str]] = field(default_factory=list)
    outcome: Optional[str] = None
    outcome_message: str = ""
    heals: List[HealEvent] = field(default_factory=list)
    help: Optional[HelpOutcome] = None
    escape_succeeded: Optional[bool] = None
    show_stats: bool = True

    @property
    def messages(self) -> List[str]:
        return [line for beat in self.beats for line in beat]


@dataclass
class CombatantView:
    name: str
    hp: int
    attack_points: int
    affiliation: str


@dataclass
class BattleStatsView:
    player: CombatantView
    enemy: CombatantView
    location_name: str
    help_left: int
    turn: int


@dataclass
class BriefingView:
    player_name: str
    affiliation_line: str
    location_name: str
    location_description: str
    enemy_name: str
    narrative_lines: List[str] = field(default_factory=list)
