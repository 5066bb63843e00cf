from __future__ import annotations

import random
from typing import Dict, Mapping, Tuple


DEFAULT_LINES: Dict[str, Tuple[str, ...]] = {
    "create_player": (
        "You salute with your fist over your heart. Your oath is sworn.",
        "Your gear is strapped on and your blades are sharpened.",
        "The commander reads your name aloud. There is no turning back now.",
    ),
    "go_to_location": (
        "Your squad rides out beyond the walls at dawn.",
        "The gate rises and the horses thunder out.",
        "You fire your anchors and swing toward the mission site.",
    ),
    "enemy_found": (
        "A shadow rises over the rooftops. Contact!",
        "The ground shakes. Something big is coming.",
        "A flare goes up: a titan has been spotted!",
    ),
    "player_attacks": (
        "You spin through the air and slash at the nape!",
        "Your blades bite deep into titan flesh!",
        "You anchor into its shoulder and strike!",
    ),
    "enemy_attacks": (
        "The titan swats you out of the air!",
        "A massive hand slams you into a wall!",
        "The titan's jaws snap shut inches from you, and the blow still lands!",
    ),
    "escape_success": (
        "You fire your gas and vanish over the rooftops. You made it out alive.",
        "Your horse outruns the titan. You live to fight another day.",
    ),
    "escape_failed": (
        "Your gas canister sputters and runs dry mid-flight.",
        "You slip from the rooftop and fall straight into its grasp.",
    ),
    "player_defeats_enemy": (
        "The titan collapses in a cloud of steam. Mission accomplished!",
        "With one last cut the nape gives way. The titan falls!",
    ),
    "enemy_defeats_player": (
        "The world goes dark. The titan has won this day.",
        "Your blades shatter and so does the mission. You have fallen.",
    ),
    "mutual_defeat": (
        "You strike the final blow as the titan crushes you. Both of you fall.",
        "Steam and blood fill the air. Neither of you walks away.",
    ),
}


class NarrativeProvider:
    """Returns flavour lines for fixed battle events.

    Lines are sampled from ``lines`` with the injected ``rng`` so seeded runs
    read the same every time.
    """

    def __init__(self, rng: random.Random | None = None, lines: Mapping[str, Tuple[str, ...]] | None = None) -> None:
        self.rng = rng or random.Random()
        self._lines: Dict[str, Tuple[str, ...]] = dict(DEFAULT_LINES)
        if lines:
            self._lines.update({key: tuple(value) for key, value in lines.items()})

    def line(self, event_kind: str) -> str:
        pool = self._lines.get(str(event_kind), ())
        if not pool:
            return ""
        return pool[self.rng.randrange(len(pool))]

    def create_player(self) -> str:
        return self.line("create_player")

    def go_to_location(self) -> str:
        return self.line("go_to_location")

    def enemy_found(self) -> str:
        return self.line("enemy_found")

    def player_attacks(self) -> str:
        return self.line("player_attacks")

    def enemy_attacks(self) -> str:
        return self.line("enemy_attacks")

    def escape_success(self) -> str:
        return self.line("escape_success")

    def escape_failed(self) -> str:
        return self.line("escape_failed")

    def player_defeats_enemy(self) -> str:
        return self.line("player_defeats_enemy")

    def enemy_defeats_player(self) -> str:
        return self.line("enemy_defeats_player")

    def mutual_defeat(self) -> str:
        return self.line("mutual_defeat")
