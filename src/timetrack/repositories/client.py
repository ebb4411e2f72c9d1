"""Repository for Client entity."""

from sqlalchemy import func
from sqlmodel import select

from src.timetrack.models import Client
from src.timetrack.repositories.base import AccountScopedRepository


class ClientRepository(AccountScopedRepository[Client]):
    model = Client

    async def list_by_status(self, account_id: int, active: bool) -> list[Client]:
        result = await self.session.execute(
            select(Client)
            .where(Client.account_id == account_id, Client.active == active)
            .order_by(func.lower(Client.name))
        )
        return list(result.scalars().all())
