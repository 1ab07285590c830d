"""Settings API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.settings import (
    GetSettings,
    SettingsResponseDTO,
    UpdateSettings,
    UpdateSettingsCommandDTO,
)
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsResponseDTO)
async def get_settings(session: AsyncSession = Depends(get_session)):
    """Farm settings. Created with defaults on first read."""
    use_case = GetSettings(SqlAlchemyUnitOfWork(session), SqlAlchemySettingsRepository(session))
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("", response_model=SettingsResponseDTO)
async def update_settings(
    request: UpdateSettingsCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Update farm settings.

    Only fields present in the body change. A new global rate applies to
    bills generated afterwards.
    """
    use_case = UpdateSettings(SqlAlchemyUnitOfWork(session), SqlAlchemySettingsRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
