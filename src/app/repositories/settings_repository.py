"""Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.settings import Settings


class SettingsRepository(ABC):
    """
    Repository interface for the single settings row

    Never caches: every call reads the store so concurrent requests do not
    see a stale rate.
    """

    @abstractmethod
    async def get(self) -> Optional[Settings]:
        pass

    @abstractmethod
    async def create(self, settings: Settings) -> Settings:
        pass

    @abstractmethod
    async def update(self, settings: Settings) -> Settings:
        pass
