"""SQLAlchemy Settings Repository Implementation"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.settings_repository import SettingsRepository
from src.domain.settings import Settings, SETTINGS_ID
from .errors import translate_storage_errors


class SqlAlchemySettingsRepository(SettingsRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def get(self) -> Optional[Settings]:
        statement = select(Settings).where(Settings.id == SETTINGS_ID)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def create(self, settings: Settings) -> Settings:
        settings.id = SETTINGS_ID
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings

    @translate_storage_errors
    async def update(self, settings: Settings) -> Settings:
        settings.updated_at = datetime.utcnow()
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings
