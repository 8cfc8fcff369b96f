"""벤더 티켓 Pydantic 스키마.

Vendor ticket request/response schemas.
VendorTicketUpdate is presence-based like ActionItemUpdate; only dateClosed
accepts an explicit null (clears the closed date).
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from erp_hub.schemas.common import CamelModel
from erp_hub.schemas.issue import IssueStatus

Vendor = Literal["CMIC", "PROCORE", "OTHER"]


class VendorTicketCreate(CamelModel):
    issue_id: str = Field(min_length=1)
    ticket_number: str = Field(min_length=1)
    vendor: Vendor
    status: IssueStatus | None = None
    description: str | None = None
    date_opened: datetime | None = None
    date_closed: datetime | None = None
    notes: str | None = None


class VendorTicketUpdate(CamelModel):
    ticket_number: str | None = Field(default=None, min_length=1)
    vendor: Vendor | None = None
    status: IssueStatus | None = None
    description: str | None = None
    date_opened: datetime | None = None
    date_closed: datetime | None = None
    notes: str | None = None


class VendorTicketOut(CamelModel):
    id: str
    issue_id: str
    ticket_number: str
    vendor: str
    status: str
    description: str | None = None
    date_opened: datetime
    date_closed: datetime | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class IssueTitle(CamelModel):
    id: str
    title: str


class VendorTicketWithIssue(VendorTicketOut):
    issue: IssueTitle | None = None
