"""카테고리 라우터."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.database import get_db
from erp_hub.schemas.category import CategoryCreate, CategoryOut, CategoryWithCount
from erp_hub.services.category_service import category_service
from erp_hub.services.dashboard_service import dashboard_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[CategoryWithCount])
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[CategoryWithCount]:
    """이름순 카테고리 목록 (이슈 수 포함)."""
    return await category_service.list_categories(db)


@router.post("", status_code=201)
async def create_category(
    data: CategoryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    category = await category_service.create_category(db, data)
    await db.commit()
    dashboard_service.revalidate()
    return {"success": True, "category": CategoryOut.model_validate(category)}
