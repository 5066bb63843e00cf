from __future__ import annotations


MAX_HELP_REQUESTS = 3

MAX_HEAL = 15
HEAL_CHANCE = 0.5
MINIMUM_HEAL = 1

ESCAPE_CHANCE = 0.5

PLAYER_BASE_HP = 100
PLAYER_ATTACK_POINTS = 15


def check_help_left(help_requests_used: int) -> int:
    return max(0, MAX_HELP_REQUESTS - int(help_requests_used))
