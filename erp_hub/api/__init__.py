"""API 라우터 패키지 — /api 하위 모든 JSON 엔드포인트 통합.

API Router package — Aggregates every JSON endpoint mounted under /api.

Included routers:
    - issues: 이슈 CRUD 및 보관 (Issue CRUD and archive)
    - categories: 카테고리 (Categories with issue counts)
    - notes: 메모 (Notes on issues)
    - attachments: 메모 첨부파일 업로드/다운로드 (Note attachments)
    - action_items: 실행 항목 및 재정렬 (Action items and reordering)
    - vendor_tickets: 벤더 티켓 (CMiC / Procore tickets per issue)
    - email_templates: 이메일 템플릿 및 렌더링 (Email templates and rendering)
    - email_drafts: 이메일 초안 (Email drafts linked to issues)
    - zendesk: Zendesk 티켓 조회 및 OAuth (Zendesk tickets and OAuth)
    - auth: Azure AD 설정 및 bypass 로그인 (Auth config and bypass login)
    - ai: AI 이메일 도우미와 ERP 채팅 (AI email assistant and ERP chat)
"""

from fastapi import APIRouter

from erp_hub.api.action_items import router as action_items_router
from erp_hub.api.ai import router as ai_router
from erp_hub.api.attachments import router as attachments_router
from erp_hub.api.auth import router as auth_router
from erp_hub.api.categories import router as categories_router
from erp_hub.api.email_drafts import router as email_drafts_router
from erp_hub.api.email_templates import router as email_templates_router
from erp_hub.api.issues import router as issues_router
from erp_hub.api.notes import router as notes_router
from erp_hub.api.vendor_tickets import router as vendor_tickets_router
from erp_hub.api.zendesk import router as zendesk_router

api_router: APIRouter = APIRouter()

# 이슈 추적 — Issue tracking
api_router.include_router(issues_router, prefix="/issues", tags=["Issues"])
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(notes_router, prefix="/notes", tags=["Notes"])
api_router.include_router(attachments_router, prefix="/attachments", tags=["Attachments"])
api_router.include_router(action_items_router, prefix="/action-items", tags=["Action Items"])
api_router.include_router(vendor_tickets_router, prefix="/vendor-tickets", tags=["Vendor Tickets"])

# 커뮤니케이션 — Email templates and drafts
api_router.include_router(email_templates_router, prefix="/email-templates", tags=["Email Templates"])
api_router.include_router(email_drafts_router, prefix="/email-drafts", tags=["Email Drafts"])

# 외부 연동 — Integrations
api_router.include_router(zendesk_router, prefix="/zendesk", tags=["Zendesk"])
api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(ai_router, prefix="/ai", tags=["AI"])
