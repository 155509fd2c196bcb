"""Export a user's checklist as CSV or JSON."""
import csv
import io
import json
from datetime import datetime

from app.core.clock import utcnow
from app.models import User, UserChecklist
from app.onboarding.checklist import calculate_progress

CSV_HEADER = ["Section", "Task", "Status", "Due Date", "Completed Date", "Description"]


def _date(value: datetime | None) -> str:
    return value.date().isoformat() if value else ""


def build_export_data(checklist: UserChecklist | None, user: User) -> dict:
    """Snapshot of a checklist plus its progress summary."""
    progress = calculate_progress(checklist)
    sections = checklist.sections if checklist is not None else []
    return {
        "user_name": user.name,
        "user_role": user.role.value,
        "progress": {
            "total": progress.total,
            "completed": progress.completed,
            "percentage": progress.percentage,
        },
        "sections": [
            {
                "title": section.title,
                "items": [
                    {
                        "title": item.title,
                        "description": item.description,
                        "status": item.status.value,
                        "due_date": item.due_date,
                        "completed_at": item.completed_at,
                    }
                    for item in section.items
                ],
            }
            for section in sections
        ],
    }


def export_to_csv(data: dict) -> str:
    """One row per task. Dates are ISO calendar dates."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for section in data["sections"]:
        for item in section["items"]:
            writer.writerow(
                [
                    section["title"],
                    item["title"],
                    item["status"],
                    _date(item["due_date"]),
                    _date(item["completed_at"]),
                    item["description"] or "",
                ]
            )
    return buffer.getvalue()


def export_to_json(data: dict, now: datetime | None = None) -> str:
    """Pretty-printed JSON document with an export timestamp."""
    document = {
        "exported_at": (now or utcnow()).isoformat() + "Z",
        "user": data["user_name"],
        "role": data["user_role"],
        "progress": data["progress"],
        "sections": [
            {
                "title": section["title"],
                "items": [
                    {
                        **item,
                        "due_date": item["due_date"].isoformat() if item["due_date"] else None,
                        "completed_at": (
                            item["completed_at"].isoformat() if item["completed_at"] else None
                        ),
                    }
                    for item in section["items"]
                ],
            }
            for section in data["sections"]
        ],
    }
    return json.dumps(document, indent=2)


def export_filename(role: str, extension: str, now: datetime | None = None) -> str:
    """e.g. onboarding-checklist-RN-2024-05-01.csv"""
    return f"onboarding-checklist-{role}-{(now or utcnow()).date().isoformat()}.{extension}"
