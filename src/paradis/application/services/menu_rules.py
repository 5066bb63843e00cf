from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class MenuResolution(Generic[T]):
    value: T
    substituted: bool = False


def verify_within_list_range(choice_num: int, list_length: int) -> bool:
    return 1 <= choice_num <= list_length


def parse_menu_choice(raw: object) -> Optional[int]:
    """Parse a 1-based menu entry. Returns None for anything that is not an integer."""

    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw or "").strip()
    try:
        return int(text)
    except ValueError:
        return None


def resolve_menu_choice(
    raw: object,
    options: Sequence[T],
    rng: random.Random,
    fallback: Optional[T] = None,
) -> MenuResolution[T]:
    """Map raw input onto ``options``.

    Invalid entries are never rejected: ``fallback`` is used when given,
    otherwise a uniformly random option is substituted.
    """

    if not options:
        raise ValueError("resolve_menu_choice requires at least one option")

    number = parse_menu_choice(raw)
    if number is not None and verify_within_list_range(number, len(options)):
        return MenuResolution(options[number - 1])
    if fallback is not None:
        return MenuResolution(fallback, substituted=True)
    return MenuResolution(rng.choice(list(options)), substituted=True)
