import logging
import os
import random
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from paradis.application.services.battle_flavour import NarrativeProvider
from paradis.application.services.battle_log import register_battle_log_handlers
from paradis.application.services.battle_service import BattleService
from paradis.application.services.event_bus import EventBus
from paradis.application.services.session_service import SessionService
from paradis.infrastructure.inmemory.inmemory_comrade_repo import InMemoryComradeRepository
from paradis.infrastructure.inmemory.inmemory_location_repo import InMemoryLocationRepository


_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring %s=%r; expected a number", name, raw)
        return default


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring %s=%r; expected an integer", name, raw)
        return None


@dataclass(frozen=True)
class Settings:
    seed: Optional[int] = None
    pacing_seconds: float = 1.0
    cap_healing: bool = False
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            seed=_env_int("PARADIS_SEED"),
            pacing_seconds=max(_env_float("PARADIS_PACING_S", 1.0), 0.0),
            cap_healing=_env_flag("PARADIS_HEAL_CAP"),
            log_level=os.getenv("PARADIS_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
            log_file=os.getenv("PARADIS_LOG_FILE", "").strip() or None,
        )


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, logging.WARNING)
    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, handlers=[handler], force=True)


def create_session_service(settings: Optional[Settings] = None) -> SessionService:
    settings = settings or Settings.from_env()
    rng = random.Random(settings.seed)
    narrative_rng = random.Random(rng.getrandbits(32)) if settings.seed is not None else random.Random()

    location_repo = InMemoryLocationRepository(rng=rng, cap_healing=settings.cap_healing)
    comrade_repo = InMemoryComradeRepository(rng=rng)
    narrative = NarrativeProvider(rng=narrative_rng)

    event_bus = EventBus()
    battle_log = register_battle_log_handlers(event_bus)
    battle_service = BattleService(
        comrade_repo,
        narrative=narrative,
        rng=rng,
        event_publisher=event_bus.publish,
    )

    return SessionService(
        location_repo,
        comrade_repo,
        battle_service,
        narrative=narrative,
        rng=rng,
        cap_healing=settings.cap_healing,
        pacing_seconds=settings.pacing_seconds,
        battle_log=battle_log,
    )
