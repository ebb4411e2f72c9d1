"""Shared transaction handling for services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)


class BaseService:
    """Services own the transaction: repositories never commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def storage_errors(
        self, message: str, code: ErrorCode = ErrorCode.SYSTEM_ERROR
    ) -> AsyncGenerator[None]:
        """Roll back on any failure and report database errors under ``code``.

        Callers commit inside the block.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error(message, error=str(exc))
            raise AppError(code, message) from exc
        except Exception:
            await self.session.rollback()
            raise
