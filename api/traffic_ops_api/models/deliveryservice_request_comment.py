"""Delivery service request comment model."""
from datetime import datetime
from sqlalchemy import Integer, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from traffic_ops_api.models.base import Base
from traffic_ops_api.models.user import TmUser
from traffic_ops_api.models.deliveryservice_request import DeliveryServiceRequest


class DeliveryServiceRequestComment(Base):
    """Reviewer discussion attached to a delivery service request.

    Rows are written through the SQL templates of the comment resource; this
    mapping exists for schema creation and test fixtures.
    """
    __tablename__ = "deliveryservice_request_comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tm_user.id", ondelete="CASCADE"), nullable=False)
    deliveryservice_request_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("deliveryservice_request.id", ondelete="CASCADE"), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False)

    author: Mapped["TmUser"] = relationship("TmUser")
    deliveryservice_request: Mapped["DeliveryServiceRequest"] = relationship("DeliveryServiceRequest")
