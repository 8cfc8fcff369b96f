"""이메일 템플릿 서비스 — CRUD, 기본 템플릿 관리, 템플릿 데이터와 렌더링.

Email template service.

Default template rule: when a create/update sets is_default, every other
default is cleared inside the same transaction as the write, and the route
commits once, so exactly one default remains.
"""

import json
import logging
import re
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.models.email import EmailTemplate
from erp_hub.models.issue import Issue
from erp_hub.repositories.category_repository import category_repository
from erp_hub.repositories.email_repository import email_template_repository
from erp_hub.repositories.issue_repository import issue_repository
from erp_hub.schemas.email import EmailTemplateWrite
from erp_hub.services.zendesk_service import ZendeskError, empty_ticket_stats, zendesk_service
from erp_hub.utils.exceptions import NotFoundError
from erp_hub.utils.timezone import format_date, format_week_range, now_utc, week_bounds

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")

WEEKLY_SUMMARY_CONTENT: str = """Dear Stakeholders,

Here's our weekly ERP status update for {{currentWeek}}.

## Executive Summary

This week we have {{stats.total}} total issues in our system, with {{stats.open}} currently open and {{stats.inProgress}} actively being worked on. {{stats.resolvedThisWeek}} issues were resolved this week.

## Current Status Overview

- **Total Issues:** {{stats.total}}
- **Open Issues:** {{stats.open}}
- **In Progress:** {{stats.inProgress}}
- **Resolved This Week:** {{stats.resolvedThisWeek}}
- **High Priority Items:** {{stats.highPriority}}

## Issues Resolved This Week

{{resolvedThisWeek}}

## Issues Currently In Progress

{{inProgressIssues}}

## Open Issues Requiring Attention

{{openIssues}}

## High Priority Items

{{highPriorityIssues}}

If you have any questions about these items, please reach out.

Best regards,
ERP Administration Team

---
This report was generated on {{currentDate}} from the ERP Admin Hub dashboard."""

WEEKLY_SUMMARY_TEMPLATE: dict[str, Any] = {
    "name": "Weekly Summary Email",
    "description": "Standard weekly stakeholder summary with dashboard data integration",
    "subject": "ERP Weekly Status Update - {{currentWeek}}",
    "content": WEEKLY_SUMMARY_CONTENT,
    "variables": {
        "currentDate": "Current date",
        "currentWeek": "Week date range",
        "stats.total": "Total number of issues",
        "stats.open": "Number of open issues",
        "stats.inProgress": "Number of issues in progress",
        "stats.resolved": "Number of resolved issues",
        "stats.resolvedThisWeek": "Number resolved this week",
        "stats.highPriority": "Number of high priority issues",
        "openIssues": "List of open issues",
        "inProgressIssues": "List of in-progress issues",
        "resolvedThisWeek": "List of issues resolved this week",
        "highPriorityIssues": "List of high priority issues",
    },
    "is_default": True,
}


def _serialize_variables(variables: dict[str, str] | str | None) -> str | None:
    if variables is None:
        return None
    if isinstance(variables, str):
        return variables
    return json.dumps(variables)


def _category_name(issue: Issue) -> str:
    return issue.category.name if issue.category else "Uncategorized"


def _render_value(value: Any) -> str:
    """목록은 글머리표 줄로, 나머지는 문자열로 변환."""
    if isinstance(value, list):
        if not value:
            return "- None"
        lines = []
        for entry in value:
            if isinstance(entry, dict):
                label = entry.get("title") or entry.get("subject") or entry.get("name") or ""
                extras = [str(entry[k]) for k in ("priority", "category") if entry.get(k)]
                lines.append(f"- {label}" + (f" ({', '.join(extras)})" if extras else ""))
            else:
                lines.append(f"- {entry}")
        return "\n".join(lines)
    return "" if value is None else str(value)


def render_placeholders(text: str, data: dict[str, Any]) -> str:
    """{{name}} / {{stats.name}} 치환 — 알 수 없는 이름은 그대로 둡니다."""

    def _replace(match: re.Match) -> str:
        current: Any = data
        for part in match.group(1).split("."):
            if not isinstance(current, dict) or part not in current:
                return match.group(0)
            current = current[part]
        return _render_value(current)

    return _PLACEHOLDER.sub(_replace, text)


class EmailTemplateService:

    async def list_templates(self, db: AsyncSession) -> Sequence[EmailTemplate]:
        return await email_template_repository.list_ordered(db)

    async def get_template(self, db: AsyncSession, template_id: str) -> EmailTemplate:
        template = await email_template_repository.get_by_id(db, template_id)
        if template is None:
            raise NotFoundError("Template not found")
        return template

    async def create_template(self, db: AsyncSession, data: EmailTemplateWrite) -> EmailTemplate:
        if data.is_default:
            await email_template_repository.clear_defaults(db)
        return await email_template_repository.create(
            db,
            {
                "name": data.name,
                "description": data.description,
                "subject": data.subject,
                "content": data.content,
                "variables": _serialize_variables(data.variables),
                "is_default": data.is_default,
            },
        )

    async def replace_template(self, db: AsyncSession, template_id: str, data: EmailTemplateWrite) -> EmailTemplate:
        """전체 교체 — 보내지 않은 선택 필드는 기본값으로 덮어씁니다."""
        await self.get_template(db, template_id)
        if data.is_default:
            await email_template_repository.clear_defaults(db, except_id=template_id)
        updated = await email_template_repository.update(
            db,
            template_id,
            {
                "name": data.name,
                "description": data.description,
                "subject": data.subject,
                "content": data.content,
                "variables": _serialize_variables(data.variables),
                "is_default": data.is_default,
            },
        )
        if updated is None:
            raise NotFoundError("Template not found")
        return updated

    async def delete_template(self, db: AsyncSession, template_id: str) -> None:
        if not await email_template_repository.delete(db, template_id):
            raise NotFoundError("Template not found")

    async def init_templates(self, db: AsyncSession) -> dict[str, Any]:
        """템플릿이 하나도 없을 때만 주간 요약 샘플을 생성합니다."""
        count = await email_template_repository.count(db)
        if count > 0:
            return {"message": "Templates already exist", "count": count}
        template = await self.create_template(db, EmailTemplateWrite(**WEEKLY_SUMMARY_TEMPLATE))
        return {"message": "Sample template created successfully", "template": template}

    async def get_template_data(self, db: AsyncSession) -> dict[str, Any]:
        """플레이스홀더 치환용 데이터 — 통계, 이슈 목록, 카테고리, Zendesk."""
        now = now_utc()
        week_start, week_end = week_bounds(now)

        open_issues = await issue_repository.list_for_report(db, Issue.status == "OPEN")
        in_progress = await issue_repository.list_for_report(db, Issue.status == "IN_PROGRESS")
        resolved_week = await issue_repository.list_for_report(
            db,
            Issue.status == "RESOLVED",
            Issue.updated_at >= week_start,
            Issue.updated_at < week_end,
        )
        high_priority = await issue_repository.list_for_report(
            db,
            Issue.priority.in_(("HIGH", "URGENT")),
            Issue.status != "CLOSED",
        )
        new_this_week = await issue_repository.count_where(
            db, Issue.created_at >= week_start, Issue.created_at < week_end
        )
        status_counts = await issue_repository.status_counts(db)
        categories = await category_repository.list_with_issue_counts(db)

        stats = {
            "total": sum(status_counts.values()),
            "open": len(open_issues),
            "inProgress": len(in_progress),
            "resolved": status_counts.get("RESOLVED", 0),
            "closed": status_counts.get("CLOSED", 0),
            "resolvedThisWeek": len(resolved_week),
            "newThisWeek": new_this_week,
            "highPriority": len(high_priority),
        }

        return {
            "currentDate": format_date(now),
            "currentWeek": format_week_range(now),
            "stats": stats,
            "openIssues": [
                {
                    "id": i.id,
                    "title": i.title,
                    "description": i.description,
                    "priority": i.priority,
                    "category": _category_name(i),
                    "assignedTo": i.assigned_to,
                    "createdAt": format_date(i.created_at),
                }
                for i in open_issues
            ],
            "inProgressIssues": [
                {
                    "id": i.id,
                    "title": i.title,
                    "description": i.description,
                    "priority": i.priority,
                    "category": _category_name(i),
                    "assignedTo": i.assigned_to,
                    "workPerformed": i.work_performed,
                }
                for i in in_progress
            ],
            "resolvedThisWeek": [
                {
                    "id": i.id,
                    "title": i.title,
                    "description": i.description,
                    "category": _category_name(i),
                    "resolvedAt": format_date(i.updated_at),
                }
                for i in resolved_week
            ],
            "highPriorityIssues": [
                {
                    "id": i.id,
                    "title": i.title,
                    "priority": i.priority,
                    "category": _category_name(i),
                    "status": i.status,
                }
                for i in high_priority
            ],
            "categoryBreakdown": [
                {"name": c.name, "count": n, "color": c.color} for c, n in categories
            ],
            "zendesk": await self._zendesk_data(),
        }

    async def _zendesk_data(self) -> dict[str, Any] | None:
        if not zendesk_service.is_configured():
            return None
        try:
            stats = await zendesk_service.get_ticket_stats()
            recent = await zendesk_service.get_recent_tickets(7)
            high = await zendesk_service.get_high_priority_tickets()
        except ZendeskError:
            logger.warning("Failed to fetch Zendesk data for template", exc_info=True)
            return {"stats": empty_ticket_stats(), "recentTickets": [], "highPriorityTickets": []}

        return {
            "stats": stats,
            "recentTickets": [
                {
                    "id": t.get("id"),
                    "subject": t.get("subject"),
                    "status": t.get("status"),
                    "priority": t.get("priority"),
                    "createdAt": format_date(t["created_at"]) if t.get("created_at") else None,
                    "updatedAt": format_date(t["updated_at"]) if t.get("updated_at") else None,
                }
                for t in recent
            ],
            "highPriorityTickets": [
                {
                    "id": t.get("id"),
                    "subject": t.get("subject"),
                    "priority": t.get("priority"),
                    "status": t.get("status"),
                    "createdAt": format_date(t["created_at"]) if t.get("created_at") else None,
                }
                for t in high
            ],
        }

    async def render_template(self, db: AsyncSession, template_id: str) -> dict[str, str]:
        template = await self.get_template(db, template_id)
        data = await self.get_template_data(db)
        return {
            "template_id": template.id,
            "subject": render_placeholders(template.subject, data),
            "content": render_placeholders(template.content, data),
        }


email_template_service: EmailTemplateService = EmailTemplateService()
