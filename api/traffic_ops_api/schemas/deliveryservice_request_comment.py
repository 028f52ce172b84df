"""Delivery service request comment schemas."""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field

from traffic_ops_api.crud.validators import MAX_INT, MIN_INT

# an integer that fits the id columns
RowID = Annotated[int, Field(ge=MIN_INT, le=MAX_INT)]


class DeliveryServiceRequestCommentNullable(BaseModel):
    """Wire and row form of a comment; every field may be absent.

    Field names match the column names of the comment select query so a row
    mapping validates directly; aliases give the camelCase JSON names.
    """
    author: Optional[str] = None
    author_id: Optional[RowID] = Field(default=None, alias="authorId")
    delivery_service_request_id: Optional[RowID] = Field(
        default=None, alias="deliveryServiceRequestId")
    id: Optional[RowID] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")
    value: Optional[str] = None
    xml_id: Optional[str] = Field(default=None, alias="xmlId")

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    @classmethod
    def from_row(cls, row) -> "DeliveryServiceRequestCommentNullable":
        """Build from a result row of the comment select query."""
        data = dict(row)
        data["delivery_service_request_id"] = data.pop("deliveryservice_request_id", None)
        return cls.model_validate(data)
