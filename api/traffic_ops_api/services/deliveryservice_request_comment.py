"""Delivery service request comments as a generic CRUD resource.

Storage mapping and validation are declarative; the one policy of its own is
that only a comment's author may update or delete it. That check re-reads the
row inside the request transaction and relies on the transaction's isolation
level: no row lock is taken between the check and the write.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from traffic_ops_api.crud.generic import (
    generic_create,
    generic_delete,
    generic_read,
    generic_update,
    parse_db_error,
)
from traffic_ops_api.crud.interfaces import (
    APIInfo,
    CRUDer,
    CRUDFactory,
    KeyFieldInfo,
    ReadResult,
    Result,
    WhereColumnInfo,
)
from traffic_ops_api.crud.validators import (
    MAX_INT,
    MIN_INT,
    BadKeyError,
    get_int_key,
    is_int,
    join_errs,
    required,
)
from traffic_ops_api.schemas.deliveryservice_request_comment import DeliveryServiceRequestCommentNullable

logger = logging.getLogger(__name__)

TYPE_NAME = "deliveryservice_request_comment"


def insert_query() -> str:
    return """INSERT INTO deliveryservice_request_comment (
author_id,
deliveryservice_request_id,
value) VALUES (
:author_id,
:deliveryservice_request_id,
:value) RETURNING id,last_updated"""


def select_query() -> str:
    return """SELECT
a.username AS author,
dsrc.author_id,
dsrc.deliveryservice_request_id,
dsr.deliveryservice->>'xmlId' as xml_id,
dsrc.id,
dsrc.last_updated,
dsrc.value
FROM deliveryservice_request_comment dsrc
JOIN tm_user a ON dsrc.author_id = a.id
JOIN deliveryservice_request dsr ON dsrc.deliveryservice_request_id = dsr.id
"""


def update_query() -> str:
    return """UPDATE
deliveryservice_request_comment SET
deliveryservice_request_id=:deliveryservice_request_id,
value=:value,
last_updated=CURRENT_TIMESTAMP
WHERE id=:id RETURNING last_updated"""


def delete_query() -> str:
    return """DELETE FROM deliveryservice_request_comment WHERE id = :id"""


class DeliveryServiceRequestCommentResource(CRUDer):
    """A comment bound to the request that is acting on it."""

    def __init__(self, api_info: APIInfo):
        self.api_info = api_info
        self.comment = DeliveryServiceRequestCommentNullable()

    # Identification

    def get_keys(self) -> Tuple[Dict[str, Any], bool]:
        if self.comment.id is None:
            return {"id": 0}, False
        return {"id": self.comment.id}, True

    def set_keys(self, keys: Dict[str, Any]) -> None:
        key = keys.get("id")
        # bool is an int subclass but never a valid id
        if not isinstance(key, int) or isinstance(key, bool):
            raise BadKeyError(f"bad key for {TYPE_NAME}: id must be an integer, got {key!r}")
        if not MIN_INT <= key <= MAX_INT:
            raise BadKeyError(f"bad key for {TYPE_NAME}: id out of range, got {key}")
        self.comment.id = key

    def get_key_fields_info(self) -> List[KeyFieldInfo]:
        return [KeyFieldInfo("id", get_int_key)]

    def get_type(self) -> str:
        return TYPE_NAME

    def get_audit_name(self) -> str:
        if self.comment.id is not None:
            return str(self.comment.id)
        return "unknown"

    def validate(self) -> Optional[Exception]:
        return join_errs(required({
            "deliveryServiceRequestId": self.comment.delivery_service_request_id,
            "value": self.comment.value,
        }))

    # Storage mapping

    def param_columns(self) -> Dict[str, WhereColumnInfo]:
        return {
            "authorId": WhereColumnInfo("dsrc.author_id"),
            "author": WhereColumnInfo("a.username"),
            "deliveryServiceRequestId": WhereColumnInfo("dsrc.deliveryservice_request_id"),
            "id": WhereColumnInfo("dsrc.id", is_int),
        }

    def insert_query(self) -> str:
        return insert_query()

    def select_query(self) -> str:
        return select_query()

    def update_query(self) -> str:
        return update_query()

    def delete_query(self) -> str:
        return delete_query()

    def new_read_obj(self, row) -> DeliveryServiceRequestCommentNullable:
        return DeliveryServiceRequestCommentNullable.from_row(row)

    def bind_params(self) -> Dict[str, Any]:
        return {
            "id": self.comment.id,
            "author_id": self.comment.author_id,
            "deliveryservice_request_id": self.comment.delivery_service_request_id,
            "value": self.comment.value,
        }

    def set_last_updated(self, last_updated: datetime) -> None:
        self.comment.last_updated = last_updated

    def load(self, body: Any) -> None:
        self.comment = DeliveryServiceRequestCommentNullable.model_validate(body)

    def to_response(self) -> DeliveryServiceRequestCommentNullable:
        return self.comment

    # Lifecycle

    def create(self) -> Result:
        # the author is always the caller, whatever the body said
        self.comment.author_id = self.api_info.user.id
        user_err, sys_err, status = generic_create(self)
        if user_err is not None or sys_err is not None:
            return user_err, sys_err, status
        return self._load_stored()

    def read(self) -> ReadResult:
        return generic_read(self)

    def _current(self) -> Tuple[Optional[DeliveryServiceRequestCommentNullable], Result]:
        """Re-read this comment's stored row within the request transaction."""
        try:
            row = self.api_info.tx.execute(
                text(select_query() + "WHERE dsrc.id=:id"), {"id": self.comment.id}
            ).mappings().one()
        except SQLAlchemyError as err:
            return None, parse_db_error(err, self.get_type())
        return self.new_read_obj(row), (None, None, 200)

    def _load_stored(self) -> Result:
        """Replace the in-memory comment with its stored row.

        Responses then carry the stored author and xmlId, never what the body
        claimed.
        """
        current, result = self._current()
        if current is not None:
            self.comment = current
        return result

    def update(self) -> Result:
        current, result = self._current()
        if current is None:
            return result

        if current.author_id != self.api_info.user.id:
            logger.info("user %s denied update of %s %s authored by %s",
                        self.api_info.user.id, TYPE_NAME, self.comment.id, current.author_id)
            return ValueError("Comments can only be updated by the author"), None, 400

        user_err, sys_err, status = generic_update(self)
        if user_err is not None or sys_err is not None:
            return user_err, sys_err, status
        return self._load_stored()

    def delete(self) -> Result:
        current, result = self._current()
        if current is None:
            return result

        if current.author_id != self.api_info.user.id:
            logger.info("user %s denied delete of %s %s authored by %s",
                        self.api_info.user.id, TYPE_NAME, self.comment.id, current.author_id)
            return ValueError("Comments can only be deleted by the author"), None, 400

        return generic_delete(self)


def get_type_singleton() -> CRUDFactory:
    """Factory the routes use to bind a comment to each request."""
    def factory(api_info: APIInfo) -> DeliveryServiceRequestCommentResource:
        return DeliveryServiceRequestCommentResource(api_info)
    return factory
