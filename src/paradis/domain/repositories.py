from abc import ABC, abstractmethod
from typing import List

from paradis.domain.models.combatant import Comrade
from paradis.domain.models.location import MissionLocation


RANDOM_CHOICE = "Random"


class LocationRepository(ABC):
    @abstractmethod
    def list_names(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def get(self, name: str) -> MissionLocation:
        """Build a fresh location (and its enemy). ``"Random"`` picks one uniformly."""
        raise NotImplementedError


class ComradeRepository(ABC):
    @abstractmethod
    def list_names(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def get(self, name: str) -> Comrade:
        """Build a fresh comrade. ``"Random"`` picks one uniformly."""
        raise NotImplementedError
