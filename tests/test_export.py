"""Tests for checklist export."""

import csv
import io
import json
from datetime import datetime

from sqlmodel import Session

from app.models import ItemStatus, User
from app.onboarding.export import (
    CSV_HEADER,
    build_export_data,
    export_filename,
    export_to_csv,
    export_to_json,
)


def export_data(session: Session, nurse: User) -> dict:
    item = nurse.checklist.items[0]
    item.set_status(ItemStatus.COMPLETE, datetime(2024, 5, 2, 16, 30))
    item.description = 'Read the "handbook", then sign'
    session.add(item)
    session.commit()
    return build_export_data(nurse.checklist, nurse)


class TestExport:
    """Tests for CSV and JSON export."""

    def test_build_export_data(self, session: Session, nurse: User):
        data = export_data(session, nurse)

        assert data["user_name"] == "Nina Nurse"
        assert data["user_role"] == "RN"
        assert data["progress"] == {"total": 3, "completed": 1, "percentage": 33}
        assert [s["title"] for s in data["sections"]] == ["Company Basics", "Clinical Systems"]

    def test_csv(self, session: Session, nurse: User):
        rows = list(csv.reader(io.StringIO(export_to_csv(export_data(session, nurse)))))

        assert rows[0] == CSV_HEADER
        assert len(rows) == 4
        section, task, status, due, completed, description = rows[1]
        assert (section, task, status) == ("Company Basics", "Review Employee Handbook", "COMPLETE")
        assert completed == "2024-05-02"
        assert description == 'Read the "handbook", then sign'
        # No due date and not completed
        assert rows[2][3:5] == ["", ""]

    def test_csv_without_checklist(self, session: Session, admin_user: User):
        assert export_to_csv(build_export_data(None, admin_user)).splitlines() == [
            ",".join(CSV_HEADER)
        ]

    def test_json(self, session: Session, nurse: User):
        now = datetime(2024, 5, 3, 8, 0)

        document = json.loads(export_to_json(export_data(session, nurse), now=now))

        assert document["exported_at"] == "2024-05-03T08:00:00Z"
        assert document["user"] == "Nina Nurse"
        first = document["sections"][0]["items"][0]
        assert first["status"] == "COMPLETE"
        assert first["completed_at"] == "2024-05-02T16:30:00"
        assert document["sections"][0]["items"][1]["due_date"] is None

    def test_filename(self):
        assert (
            export_filename("RN", "csv", now=datetime(2024, 5, 3, 23, 59))
            == "onboarding-checklist-RN-2024-05-03.csv"
        )
