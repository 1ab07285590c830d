"""UpdateSettings Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.pricing import fits_cents
from .dtos import UpdateSettingsCommandDTO, SettingsResponseDTO
from .get_settings import load_settings


class UpdateSettings:
    """
    Use Case: Update farm settings

    Business Rules:
    1. Settings row is created with defaults if missing, then updated
    2. global_price_per_liter must be positive
    3. Only fields present in the command change
    """

    def __init__(self, uow: UnitOfWork, settings_repo: SettingsRepository):
        self.uow = uow
        self.settings_repo = settings_repo

    async def execute(self, command: UpdateSettingsCommandDTO) -> Result[SettingsResponseDTO]:
        if command.global_price_per_liter is not None and (
            command.global_price_per_liter <= 0 or not fits_cents(command.global_price_per_liter)
        ):
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Global price per liter must be positive with at most 2 decimal places",
                    reason=f"global_price_per_liter={command.global_price_per_liter}",
                )
            )

        try:
            settings = await load_settings(self.settings_repo)

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(settings, field, value)

            settings = await self.settings_repo.update(settings)
            await self.uow.commit()

            return Return.ok(SettingsResponseDTO.from_settings(settings))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_SETTINGS_FAILED",
                    message="Failed to update settings",
                    reason=str(e),
                )
            )
