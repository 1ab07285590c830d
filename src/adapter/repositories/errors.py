"""Translation of driver errors into domain exceptions"""

import functools
from sqlalchemy.exc import InterfaceError, OperationalError
from src.domain.exceptions import StorageUnavailableError


def translate_storage_errors(func):
    """Re-raise connection-level SQLAlchemy errors as StorageUnavailableError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            raise StorageUnavailableError(str(e)) from e

    return wrapper
