"""벤더 티켓 레포지토리.

Vendor ticket repository — Handles vendor_tickets DB queries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from erp_hub.models.issue import VendorTicket
from erp_hub.repositories.base import BaseRepository


class VendorTicketRepository(BaseRepository[VendorTicket]):

    def __init__(self) -> None:
        super().__init__(VendorTicket)

    async def list_for_issue(self, db: AsyncSession, issue_id: str) -> Sequence[VendorTicket]:
        """이슈의 벤더 티켓 — 벤더명순, 같은 벤더는 최근 개설순."""
        query: Select = (
            select(VendorTicket)
            .where(VendorTicket.issue_id == issue_id)
            .order_by(VendorTicket.vendor.asc(), VendorTicket.date_opened.desc())
        )
        result = await db.execute(query)
        return result.scalars().all()

    async def get_with_issue(self, db: AsyncSession, ticket_id: str) -> VendorTicket | None:
        return await self.get_by_id(db, ticket_id, options=[selectinload(VendorTicket.issue)])


vendor_ticket_repository: VendorTicketRepository = VendorTicketRepository()
