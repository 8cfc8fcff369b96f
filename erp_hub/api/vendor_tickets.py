"""벤더 티켓 라우터 — 이슈별 CMiC / Procore 티켓 관리.

Vendor Ticket Router.
    - GET ?issueId=: 이슈의 벤더 티켓 목록 (issueId 필수)
    - POST: 생성
    - GET/PATCH/DELETE /{ticket_id}
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.common import MessageResponse
from erp_hub.schemas.vendor_ticket import (
    VendorTicketCreate,
    VendorTicketOut,
    VendorTicketUpdate,
    VendorTicketWithIssue,
)
from erp_hub.services.vendor_ticket_service import ticket_label, vendor_ticket_service

router: APIRouter = APIRouter()


@router.get("")
async def list_vendor_tickets(
    db: Annotated[AsyncSession, Depends(get_db)],
    issue_id: str | None = Query(None, alias="issueId"),
) -> dict:
    tickets = await vendor_ticket_service.list_for_issue(db, issue_id)
    return {"success": True, "tickets": [VendorTicketOut.model_validate(t) for t in tickets]}


@router.post("")
async def create_vendor_ticket(
    data: VendorTicketCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """벤더 티켓 생성 — status 기본 OPEN, dateOpened 기본 현재 시각."""
    ticket = await vendor_ticket_service.create_ticket(db, data)
    await db.commit()
    return {
        "success": True,
        "ticket": VendorTicketOut.model_validate(ticket),
        "message": f"{ticket_label(ticket)} added successfully",
    }


@router.get("/{ticket_id}")
async def get_vendor_ticket(
    ticket_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    ticket = await vendor_ticket_service.get_ticket(db, ticket_id)
    return {"success": True, "ticket": VendorTicketWithIssue.model_validate(ticket)}


@router.patch("/{ticket_id}")
async def update_vendor_ticket(
    ticket_id: str,
    data: VendorTicketUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """보낸 필드만 수정. dateClosed: null은 종료일 삭제."""
    ticket = await vendor_ticket_service.update_ticket(db, ticket_id, data)
    await db.commit()
    return {
        "success": True,
        "ticket": VendorTicketOut.model_validate(ticket),
        "message": "Vendor ticket updated successfully",
    }


@router.delete("/{ticket_id}", response_model=MessageResponse)
async def delete_vendor_ticket(
    ticket_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    label = await vendor_ticket_service.delete_ticket(db, ticket_id)
    await db.commit()
    return {"success": True, "message": f"{label} deleted successfully"}
