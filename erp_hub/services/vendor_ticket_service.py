"""벤더 티켓 서비스.

Vendor ticket service — CMiC / Procore tickets tracked per issue.
Missing issue or ticket is a 404; PATCH applies only the fields sent,
and an explicit null is honoured for date_closed alone.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.issue import VendorTicket
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.repositories.vendor_ticket_repository import vendor_ticket_repository
from erp_hub.schemas.vendor_ticket import VendorTicketCreate, VendorTicketUpdate
from erp_hub.utils.exceptions import BadRequestError, NotFoundError

_NULLABLE_PATCH_FIELDS: frozenset[str] = frozenset({"date_closed"})


def ticket_label(ticket: VendorTicket) -> str:
    """'CMIC ticket #12345' 형식."""
    return f"{ticket.vendor} ticket #{ticket.ticket_number}"


class VendorTicketService:

    async def list_for_issue(self, db: AsyncSession, issue_id: str | None) -> Sequence[VendorTicket]:
        if not issue_id:
            raise BadRequestError("issueId parameter is required")
        return await vendor_ticket_repository.list_for_issue(db, issue_id)

    async def get_ticket(self, db: AsyncSession, ticket_id: str) -> VendorTicket:
        ticket = await vendor_ticket_repository.get_with_issue(db, ticket_id)
        if ticket is None:
            raise NotFoundError("Vendor ticket not found")
        return ticket

    async def create_ticket(self, db: AsyncSession, data: VendorTicketCreate) -> VendorTicket:
        if await issue_repository.get_by_id(db, data.issue_id) is None:
            raise NotFoundError("Issue not found")

        return await vendor_ticket_repository.create(
            db,
            {
                "issue_id": data.issue_id,
                "ticket_number": data.ticket_number,
                "vendor": data.vendor,
                "status": data.status or "OPEN",
                "description": data.description,
                "date_opened": data.date_opened or datetime.now(timezone.utc),
                "date_closed": data.date_closed,
                "notes": data.notes,
            },
        )

    async def update_ticket(self, db: AsyncSession, ticket_id: str, data: VendorTicketUpdate) -> VendorTicket:
        update_data: dict[str, Any] = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in _NULLABLE_PATCH_FIELDS
        }
        updated = await vendor_ticket_repository.update(db, ticket_id, update_data)
        if updated is None:
            raise NotFoundError("Vendor ticket not found")
        return updated

    async def delete_ticket(self, db: AsyncSession, ticket_id: str) -> str:
        """삭제 후 응답 메시지용 라벨을 반환합니다."""
        ticket = await vendor_ticket_repository.get_by_id(db, ticket_id)
        if ticket is None:
            raise NotFoundError("Vendor ticket not found")
        label = ticket_label(ticket)
        await vendor_ticket_repository.delete(db, ticket_id)
        return label


vendor_ticket_service: VendorTicketService = VendorTicketService()
