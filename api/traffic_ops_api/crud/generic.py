"""Generic execution of a resource's declared SQL.

Every function here works for any :class:`CRUDer`; resources add policy on
top (see the comment resource's author check) and delegate the rest.
"""
import logging

from sqlalchemy import text
from sqlalchemy.exc import DataError, IntegrityError, NoResultFound, SQLAlchemyError

from traffic_ops_api.crud.interfaces import CRUDer, ReadResult, Result
from traffic_ops_api.crud.validators import join_errs
from traffic_ops_api.crud.where import build_where_and_order_by_and_pagination

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


def parse_db_error(err: Exception, type_name: str) -> Result:
    """Classify a database error as a client error or a server error."""
    if isinstance(err, NoResultFound):
        return ValueError(f"no {type_name} found with this id"), None, 404

    if isinstance(err, IntegrityError):
        code = getattr(err.orig, "pgcode", None)
        message = str(err.orig)
        if code == UNIQUE_VIOLATION or "UNIQUE constraint failed" in message:
            return ValueError(f"{type_name} already exists"), None, 400
        if code == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in message:
            return ValueError(f"{type_name} references a resource that does not exist"), None, 400
        if code == NOT_NULL_VIOLATION or "NOT NULL constraint failed" in message:
            return ValueError(f"{type_name} is missing a required field"), None, 400
        return ValueError(f"{type_name} violates a database constraint"), None, 400

    if isinstance(err, DataError):
        return ValueError(f"invalid value for {type_name}"), None, 400

    return None, RuntimeError(f"database error on {type_name}: {err}"), 500


def generic_create(obj: CRUDer) -> Result:
    """Insert ``obj`` and take its generated key and timestamp from RETURNING."""
    tx = obj.api_info.tx
    try:
        rows = tx.execute(text(obj.insert_query()), obj.bind_params()).mappings().all()
    except SQLAlchemyError as err:
        return parse_db_error(err, obj.get_type())

    if not rows:
        return None, RuntimeError(f"no {obj.get_type()} was inserted, no id was returned"), 500
    if len(rows) > 1:
        return None, RuntimeError(f"too many ids returned from {obj.get_type()} insert"), 500

    row = rows[0]
    obj.set_keys({"id": row["id"]})
    obj.set_last_updated(row["last_updated"])
    return None, None, 200


def generic_read(obj: CRUDer) -> ReadResult:
    """Select rows filtered by the request's query parameters."""
    where, order_by, pagination, query_values, errs = build_where_and_order_by_and_pagination(
        obj.api_info.params, obj.param_columns())
    if errs:
        return [], join_errs(errs), None, 400

    query = obj.select_query() + where + order_by + pagination
    try:
        rows = obj.api_info.tx.execute(text(query), query_values).mappings().all()
    except SQLAlchemyError as err:
        return [], None, RuntimeError(f"querying {obj.get_type()}: {err}"), 500

    return [obj.new_read_obj(row) for row in rows], None, None, 200


def generic_update(obj: CRUDer) -> Result:
    """Update the row ``obj`` is keyed to and refresh its timestamp."""
    try:
        rows = obj.api_info.tx.execute(text(obj.update_query()), obj.bind_params()).mappings().all()
    except SQLAlchemyError as err:
        return parse_db_error(err, obj.get_type())

    if not rows:
        return ValueError(f"no {obj.get_type()} found with this id"), None, 404
    if len(rows) > 1:
        return None, RuntimeError(f"too many ids returned from {obj.get_type()} update"), 500

    obj.set_last_updated(rows[0]["last_updated"])
    return None, None, 200


def generic_delete(obj: CRUDer) -> Result:
    """Delete the row ``obj`` is keyed to; exactly one row must go."""
    keys, _ = obj.get_keys()
    try:
        result = obj.api_info.tx.execute(text(obj.delete_query()), keys)
    except SQLAlchemyError as err:
        return parse_db_error(err, obj.get_type())

    if result.rowcount == 0:
        return ValueError(f"no {obj.get_type()} with that key found"), None, 404
    if result.rowcount > 1:
        logger.error("%s delete with keys %s affected %d rows", obj.get_type(), keys, result.rowcount)
        return None, RuntimeError(f"{obj.get_type()} delete affected too many rows: {result.rowcount}"), 500
    return None, None, 200
