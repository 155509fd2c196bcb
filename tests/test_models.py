"""Tests for database models."""

from datetime import datetime

import pytest
from sqlalchemy import DateTime
from sqlmodel import Session, SQLModel, select

from app.models import (
    ItemStatus,
    Notification,
    PasswordResetToken,
    Role,
    User,
    UserChecklist,
    UserItem,
    UserStatus,
)
from tests.helpers import make_user


class TestUserModel:
    """Tests for the User model."""

    def test_defaults(self, session: Session):
        """Test a new user starts pending, unverified and as CS."""
        user = User(email="new@example.com")
        session.add(user)
        session.commit()
        session.refresh(user)

        assert user.status == UserStatus.PENDING
        assert user.role == Role.CS
        assert user.email_verified is None
        assert user.checklist is None
        assert user.is_admin is False

    def test_unique_email(self, session: Session):
        """Test that email must be unique."""
        session.add(User(email="dup@example.com"))
        session.commit()
        session.add(User(email="dup@example.com"))

        with pytest.raises(Exception):  # IntegrityError
            session.commit()

    def test_delete_cascades_to_checklist(self, session: Session, nurse: User):
        """Test deleting a user removes their checklist and its items."""
        session.add(Notification(user_id=nurse.id, title="Hi", message="Hello"))
        session.commit()

        session.delete(nurse)
        session.commit()

        assert session.exec(select(UserChecklist)).all() == []
        assert session.exec(select(UserItem)).all() == []
        assert session.exec(select(Notification)).all() == []


class TestUserItemModel:
    """Tests for UserItem status handling."""

    def test_set_status_complete_sets_completed_at(self, nurse: User):
        item = nurse.checklist.items[0]
        now = datetime(2024, 5, 1, 12, 0)

        item.set_status(ItemStatus.COMPLETE, now)

        assert item.status == ItemStatus.COMPLETE
        assert item.completed_at == now

    def test_set_status_clears_completed_at(self, nurse: User):
        item = nurse.checklist.items[0]
        item.set_status(ItemStatus.COMPLETE, datetime(2024, 5, 1))

        item.set_status(ItemStatus.IN_PROGRESS)

        assert item.completed_at is None

    def test_checklist_items_in_display_order(self, nurse: User):
        titles = [item.title for item in nurse.checklist.items]
        assert titles == ["Review Employee Handbook", "Meet Your Team", "EHR System Training"]


class TestTokenModel:
    """Tests for account tokens."""

    def test_is_expired(self, session: Session):
        user = make_user(session, "token@example.com")
        token = PasswordResetToken(
            token="abc", user_id=user.id, expires=datetime(2024, 5, 1, 12, 0)
        )

        assert token.is_expired(datetime(2024, 5, 1, 12, 1)) is True
        assert token.is_expired(datetime(2024, 5, 1, 11, 59)) is False


class TestTimestampColumns:
    """Tests for how timestamps are stored."""

    def test_columns_are_naive_datetimes(self):
        """Test every timestamp column uses a plain DateTime without timezone."""
        names = {"created_at", "updated_at", "completed_at", "due_date", "expires", "email_verified"}
        columns = [
            column
            for table in SQLModel.metadata.sorted_tables
            for column in table.columns
            if column.name in names
        ]

        assert columns
        for column in columns:
            assert type(column.type) is DateTime, f"{column.table.name}.{column.name}"
            assert column.type.timezone is False

    def test_naive_values_round_trip(self, session: Session):
        user = make_user(session, "stamp@example.com")
        expires = datetime(2024, 5, 1, 12, 0)
        session.add(PasswordResetToken(token="stamp", user_id=user.id, expires=expires))
        session.commit()
        session.expire_all()

        token = session.exec(
            select(PasswordResetToken).where(PasswordResetToken.token == "stamp")
        ).one()
        assert token.expires == expires
        assert token.expires.tzinfo is None
        assert token.created_at.tzinfo is None
