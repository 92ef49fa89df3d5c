"""SQLAlchemy models for the smartspend blob store."""

from datetime import datetime, UTC
from sqlalchemy import Column, String, DateTime, LargeBinary, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Blob(Base):
    """One snapshot blob, replaced wholesale on every save."""

    __tablename__ = "blobs"

    key = Column(String, primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Background saves run on a worker thread
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    return sessionmaker(bind=engine)
