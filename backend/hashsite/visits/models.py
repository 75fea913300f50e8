"""Visit counter SQLAlchemy model and response schema."""

from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from hashsite.db.session import Base

COUNTER_ID = 1


class Visit(Base):
    """Single-row table holding the homepage visit count (row id 1)."""

    __tablename__ = "Visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class VisitsResponse(BaseModel):
    """Body of /api/getVisits."""

    visits: int
