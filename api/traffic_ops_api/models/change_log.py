"""API change log model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from traffic_ops_api.models.base import Base
from traffic_ops_api.models.user import TmUser


class ChangeLog(Base):
    """One row per successful create, update or delete made through the API."""
    __tablename__ = "log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    level: Mapped[str] = mapped_column(String(45), nullable=False)  # e.g., "APICHANGE"
    message: Mapped[str] = mapped_column(Text, nullable=False)
    tm_user: Mapped[int] = mapped_column(Integer, ForeignKey("tm_user.id"), nullable=False)
    ticketnum: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False)

    user: Mapped["TmUser"] = relationship("TmUser")
