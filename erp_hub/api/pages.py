"""서버 렌더링 HTML 페이지 — 대시보드와 이슈 상세.

Server-rendered HTML pages.
    - GET /dashboard: 통계 카드 + 활성 이슈 표 (cached snapshot)
    - GET /dashboard/{issue_id}: 이슈 상세 + 메모 (없으면 404 페이지)

All dates are rendered in the display timezone.
"""

from html import escape
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from erp_hub.config import settings
from erp_hub.database import get_db
from erp_hub.schemas.issue import IssueDetail
from erp_hub.services.dashboard_service import dashboard_service
from erp_hub.services.issue_service import issue_service
from erp_hub.utils.exceptions import NotFoundError
from erp_hub.utils.timezone import format_date, format_datetime, format_long_date, format_relative

router: APIRouter = APIRouter()

PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{TITLE}}</title>
<style>
body{font-family:system-ui,sans-serif;background:#f6f7f9;color:#1f2933;margin:0}
header{background:#1f2933;color:#fff;padding:16px 32px;display:flex;justify-content:space-between;align-items:center}
header a{color:#fff;text-decoration:none;font-weight:bold}
main{max-width:1100px;margin:24px auto;padding:0 16px}
.cards{display:grid;grid-template-columns:repeat(5,1fr);gap:12px;margin-bottom:24px}
.card{background:#fff;border:1px solid #e4e7eb;border-radius:10px;padding:16px}
.card .n{font-size:28px;font-weight:bold}
.card .l{font-size:12px;color:#7b8794;text-transform:uppercase}
table{width:100%;border-collapse:collapse;background:#fff;border:1px solid #e4e7eb;border-radius:10px}
th,td{text-align:left;padding:10px 12px;border-bottom:1px solid #e4e7eb;font-size:14px;vertical-align:top}
th{font-size:12px;color:#7b8794;text-transform:uppercase}
.badge{display:inline-block;padding:2px 8px;border-radius:10px;font-size:12px;font-weight:bold}
.p-URGENT{background:#fde2e1;color:#c0392b}.p-HIGH{background:#fdebd0;color:#d35400}
.p-MEDIUM{background:#fef9e7;color:#b7950b}.p-LOW{background:#e8f6f3;color:#148f77}
.muted{color:#7b8794;font-size:13px}
.note{background:#fff;border:1px solid #e4e7eb;border-radius:10px;padding:12px 16px;margin-bottom:12px}
.field{margin-bottom:12px}.field b{display:block;font-size:12px;color:#7b8794;text-transform:uppercase}
</style>
</head>
<body>
<header><a href="/dashboard">{{APP_NAME}}</a><span class="muted">{{TODAY}}</span></header>
<main>
{{CONTENT}}
</main>
</body>
</html>"""

ISSUE_FIELDS: tuple[tuple[str, str], ...] = (
    ("description", "Description"),
    ("resolution_plan", "Resolution Plan"),
    ("work_performed", "Work Performed"),
    ("work_organization", "Work Organization"),
    ("roadblocks", "Roadblocks"),
    ("users_involved", "Users Involved"),
    ("additional_help", "Additional Help"),
)


def _render(title: str, content: str, status_code: int = 200) -> HTMLResponse:
    html = (
        PAGE_HTML.replace("{{TITLE}}", escape(title))
        .replace("{{APP_NAME}}", escape(settings.APP_NAME))
        .replace("{{TODAY}}", escape(format_long_date()))
        .replace("{{CONTENT}}", content)
    )
    return HTMLResponse(html, status_code=status_code)


def _text(value: str | None) -> str:
    return escape(value).replace("\n", "<br>") if value else '<span class="muted">None</span>'


def _stats_cards(stats: dict[str, int]) -> str:
    labels = (
        ("total", "Active Issues"),
        ("open", "Open"),
        ("in_progress", "In Progress"),
        ("urgent", "Urgent"),
        ("high", "High Priority"),
    )
    cards = "".join(
        f'<div class="card"><div class="n">{stats[key]}</div><div class="l">{label}</div></div>'
        for key, label in labels
    )
    return f'<div class="cards">{cards}</div>'


def _issue_row(row: dict[str, Any]) -> str:
    title = escape(row["title"] or "Untitled")
    category = escape(row["category_name"]) if row["category_name"] else '<span class="muted">-</span>'
    latest = escape(row["latest_note"][:120]) if row["latest_note"] else ""
    return (
        "<tr>"
        f'<td><a href="/dashboard/{escape(row["id"])}">{title}</a>'
        f'<div class="muted">{latest}</div></td>'
        f'<td><span class="badge p-{escape(row["priority"])}">{escape(row["priority"])}</span></td>'
        f'<td>{escape(row["status"].replace("_", " "))}</td>'
        f"<td>{category}</td>"
        f'<td>{escape(row["assigned_to"] or "")}</td>'
        f'<td>{row["note_count"]}</td>'
        f'<td title="{escape(format_datetime(row["updated_at"]))}">{escape(format_relative(row["updated_at"]))}</td>'
        "</tr>"
    )


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HTMLResponse:
    """활성 이슈 대시보드 (Active issue dashboard)."""
    snapshot = await dashboard_service.get_snapshot(db)
    rows = "".join(_issue_row(r) for r in snapshot["issues"])
    if not rows:
        rows = '<tr><td colspan="7" class="muted">No active issues</td></tr>'
    content = (
        "<h1>Dashboard</h1>"
        + _stats_cards(snapshot["stats"])
        + "<table><thead><tr><th>Issue</th><th>Priority</th><th>Status</th><th>Category</th>"
        "<th>Assigned To</th><th>Notes</th><th>Updated</th></tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )
    return _render("Dashboard", content)


def _issue_detail(issue: IssueDetail) -> str:
    meta = [
        f'<span class="badge p-{escape(issue.priority)}">{escape(issue.priority)}</span>',
        escape(issue.status.replace("_", " ")),
    ]
    if issue.category:
        meta.append(escape(issue.category.name))
    if issue.assigned_to:
        meta.append(f"Assigned to {escape(issue.assigned_to)}")
    if issue.cmic_ticket_number:
        meta.append(f"CMiC #{escape(issue.cmic_ticket_number)}")

    fields = "".join(
        f'<div class="field"><b>{label}</b>{_text(getattr(issue, attr))}</div>'
        for attr, label in ISSUE_FIELDS
    )
    notes = "".join(
        '<div class="note">'
        f'<div class="muted">{escape(note.author or "Unknown")} · {escape(format_datetime(note.created_at))}</div>'
        f"<p>{_text(note.content)}</p>"
        + "".join(
            f'<div><a href="/api/attachments/{escape(a.id)}/download">{escape(a.file_name)}</a></div>'
            for a in note.attachments
            if a.status == "AVAILABLE"
        )
        + "</div>"
        for note in issue.notes
    ) or '<p class="muted">No notes yet</p>'

    return (
        f"<h1>{escape(issue.title or 'Untitled')}</h1>"
        f'<p>{" · ".join(meta)}</p>'
        f'<p class="muted">Created {escape(format_date(issue.created_at))} · '
        f"Updated {escape(format_relative(issue.updated_at))}</p>"
        f"{fields}<h2>Notes ({len(issue.notes)})</h2>{notes}"
    )


@router.get("/dashboard/{issue_id}", response_class=HTMLResponse)
async def issue_page(
    issue_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HTMLResponse:
    try:
        issue = await issue_service.get_detail(db, issue_id)
    except NotFoundError:
        return _render(
            "Issue not found",
            '<h1>Issue not found</h1><p><a href="/dashboard">Back to dashboard</a></p>',
            status_code=404,
        )
    return _render(issue.title or "Issue", _issue_detail(issue))
