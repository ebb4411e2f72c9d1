"""Client service - the clients of an account."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.timetrack.core.exceptions import AppError, ErrorCode
from src.timetrack.models import Client
from src.timetrack.repositories import ClientRepository
from src.timetrack.services.base import BaseService


class ClientService(BaseService):
    def __init__(self, client_repo: ClientRepository, session: AsyncSession):
        super().__init__(session)
        self.client_repo = client_repo

    async def get_client(self, client_id: int, account_id: int) -> Client:
        async with self.storage_errors("Could not get client data"):
            client = await self.client_repo.get(client_id, account_id)
        if client is None:
            raise AppError(ErrorCode.INVALID_CLIENT, "No client matching id")
        return client

    async def list_clients(self, account_id: int, active: bool = True) -> list[Client]:
        async with self.storage_errors("Could not get all clients"):
            return await self.client_repo.list_by_status(account_id, active)

    async def create_client(self, account_id: int, name: str, address: str | None = None) -> Client:
        async with self.storage_errors("Could not create client"):
            client = Client(account_id=account_id, name=name, address=address or None)
            self.client_repo.add(client)
            await self.session.commit()
        return client

    async def update_client(
        self,
        account_id: int,
        client_id: int,
        name: str | None = None,
        address: str | None = None,
    ) -> Client:
        """Overwrite name and address when given."""
        async with self.storage_errors("Could not update client"):
            client = await self.client_repo.get(client_id, account_id)
            if client is None:
                raise AppError(ErrorCode.INVALID_CLIENT, "No client matching id", field="id")
            if name:
                client.name = name
            if address:
                client.address = address
            await self.session.commit()
        return client

    async def set_active(self, client_id: int, account_id: int, active: bool) -> None:
        """Archive (``active=False``) or restore a client."""
        async with self.storage_errors("Could not change client state"):
            updated = await self.client_repo.set_active(client_id, account_id, active)
            if updated == 0:
                raise AppError(ErrorCode.INVALID_CLIENT, "Client not found", field="id")
            await self.session.commit()

    async def delete_client(self, client_id: int, account_id: int) -> None:
        async with self.storage_errors("Could not delete client"):
            deleted = await self.client_repo.delete(client_id, account_id)
            if deleted == 0:
                raise AppError(ErrorCode.INVALID_CLIENT, "Client not found", field="id")
            await self.session.commit()
