from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork
from src.domain.exceptions import ConflictError, StorageUnavailableError


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits or rolls back the wrapped session; driver errors become domain errors"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(str(e.orig)) from e
        except (OperationalError, InterfaceError) as e:
            raise StorageUnavailableError(str(e)) from e

    async def rollback(self):
        await self.session.rollback()
