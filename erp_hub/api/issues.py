"""이슈 라우터 — 이슈 CRUD 및 보관 API.

Issue Router — list/create/detail/update/archive/delete endpoints.
The cached dashboard view is dropped only after a write has committed,
so a concurrent page view cannot re-cache uncommitted state.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.common import MessageResponse
from erp_hub.schemas.issue import IssueCreate, IssueDetail, IssueListItem, IssueOut, IssueUpdate
from erp_hub.services.dashboard_service import dashboard_service
from erp_hub.services.issue_service import issue_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[IssueListItem])
async def list_issues(
    db: Annotated[AsyncSession, Depends(get_db)],
    status: str | None = Query(None),
) -> list[IssueListItem]:
    """보관되지 않은 이슈 목록. status=resolved이면 해결/종료, 그 외 진행 중."""
    return await issue_service.list_issues(db, status)


@router.post("")
async def create_issue(
    data: IssueCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """이슈 생성. additionalNotes가 있으면 첫 메모로 저장."""
    issue = await issue_service.create_issue(db, data)
    await db.commit()
    dashboard_service.revalidate()
    return {"success": True, "issue": IssueOut.model_validate(issue), "id": issue.id}


@router.get("/{issue_id}", response_model=IssueDetail)
async def get_issue(
    issue_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IssueDetail:
    """이슈 상세 — 메모, 첨부파일, 실행 항목 포함."""
    return await issue_service.get_detail(db, issue_id)


@router.patch("/{issue_id}")
async def update_issue(
    issue_id: str,
    data: IssueUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """이슈 부분 수정."""
    issue = await issue_service.update_issue(db, issue_id, data)
    await db.commit()
    dashboard_service.revalidate()
    return {"success": True, "issue": IssueOut.model_validate(issue)}


@router.post("/{issue_id}/archive")
async def archive_issue(
    issue_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """이슈 보관 — 활성 목록에서 제외."""
    issue = await issue_service.archive_issue(db, issue_id)
    await db.commit()
    dashboard_service.revalidate()
    return {"success": True, "issue": IssueOut.model_validate(issue)}


@router.delete("/{issue_id}", response_model=MessageResponse)
async def delete_issue(
    issue_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """이슈 영구 삭제 — 메모, 첨부, 실행 항목 함께 삭제."""
    await issue_service.delete_issue(db, issue_id)
    await db.commit()
    dashboard_service.revalidate()
    return {"success": True, "message": "Issue deleted successfully"}
