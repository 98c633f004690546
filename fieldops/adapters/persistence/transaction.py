"""SQLAlchemy session commit: implements TransactionPort."""

from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.application.ports.transaction_port import TransactionPort


class SqlTransaction(TransactionPort):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def commit(self) -> None:
        await self._s.commit()
