"""Delivery service request model.

Only the columns the comment resource joins against are relied upon; the
request workflow itself is served elsewhere.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from traffic_ops_api.models.base import Base
from traffic_ops_api.models.user import TmUser


class DeliveryServiceRequest(Base):
    """A proposed create/update/delete of a delivery service."""
    __tablename__ = "deliveryservice_request"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tm_user.id", ondelete="CASCADE"), nullable=False)
    assignee_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("tm_user.id", ondelete="SET NULL"), nullable=True)
    change_type: Mapped[str] = mapped_column(String(16), nullable=False)  # create, update, delete
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft")
    # Proposed delivery service; comments surface its 'xmlId'
    deliveryservice: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False)

    author: Mapped["TmUser"] = relationship("TmUser", foreign_keys=[author_id])
    assignee: Mapped[Optional["TmUser"]] = relationship("TmUser", foreign_keys=[assignee_id])
