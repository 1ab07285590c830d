"""GetSettings Use Case

Reads the single settings row, creating it with defaults on first read.
"""

from config import ApplicationConfig
from libs.result import Result, Return, Error
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.pricing import to_decimal
from src.domain.settings import Settings, SETTINGS_ID
from .dtos import SettingsResponseDTO


def default_settings() -> Settings:
    return Settings(
        id=SETTINGS_ID,
        farm_name=ApplicationConfig.DEFAULT_FARM_NAME,
        global_price_per_liter=to_decimal(ApplicationConfig.DEFAULT_GLOBAL_PRICE_PER_LITER),
    )


async def load_settings(settings_repo: SettingsRepository) -> Settings:
    """
    Fresh settings from the store

    A missing row is created with defaults inside the caller's
    transaction; the caller commits. Nothing is cached between calls.
    """
    settings = await settings_repo.get()
    if settings is None:
        settings = await settings_repo.create(default_settings())
    return settings


class GetSettings:
    """
    Use Case: Read farm settings

    Business Rules:
    1. Exactly one settings row exists after the first read
    2. Always read from the store (no process-wide cache)
    """

    def __init__(self, uow: UnitOfWork, settings_repo: SettingsRepository):
        self.uow = uow
        self.settings_repo = settings_repo

    async def execute(self) -> Result[SettingsResponseDTO]:
        try:
            settings = await load_settings(self.settings_repo)
            await self.uow.commit()
            return Return.ok(SettingsResponseDTO.from_settings(settings))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GET_SETTINGS_FAILED",
                    message="Failed to load settings",
                    reason=str(e),
                )
            )
