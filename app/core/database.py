"""Database configuration and session management.

SQLite is the default backend. When it is used, each new connection is
configured with:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while an admin
      sync or a checklist update is writing.

    - **Foreign Keys**: SQLite ships with foreign key enforcement disabled;
      it is switched on so user deletion cascades to checklists, tokens and
      notifications.

    - **check_same_thread=False**: FastAPI may hand a session to a worker
      thread other than the one that opened the connection.

Any other SQLAlchemy URL (e.g. PostgreSQL) is used as-is.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


if is_sqlite:

    @sa_event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Configure SQLite pragmas on each new connection.

        These settings are connection-level, not database-level, so they must
        be set each time a new connection is established from the pool.
        """
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Import models so every table is registered on the metadata.
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
