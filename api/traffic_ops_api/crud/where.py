"""Build WHERE, ORDER BY and pagination clauses from query parameters."""
import logging
from typing import Dict, List, Tuple

from traffic_ops_api.crud.interfaces import WhereColumnInfo
from traffic_ops_api.crud.validators import parse_int

logger = logging.getLogger(__name__)

BASE_WHERE = "\nWHERE "
BASE_ORDER_BY = "\nORDER BY "
BASE_LIMIT = "\nLIMIT "
BASE_OFFSET = "\nOFFSET "


def _int_param(params: Dict[str, str], name: str, minimum: int) -> Tuple[int | None, Exception | None]:
    raw = params.get(name)
    if raw is None:
        return None, None
    try:
        value = parse_int(raw)
    except ValueError:
        return None, ValueError(f"{name} must be an integer")
    if value < minimum:
        return None, ValueError(f"{name} must be at least {minimum}")
    return value, None


def build_where_and_order_by_and_pagination(
    params: Dict[str, str],
    columns: Dict[str, WhereColumnInfo],
) -> Tuple[str, str, str, Dict[str, str], List[Exception]]:
    """
    Translate request parameters into SQL fragments.

    Only parameters named in ``columns`` filter; each becomes
    ``<column>=:<param>`` and its value is returned for binding. Parameters
    are never interpolated into the SQL text.

    Returns:
        (where, order_by, pagination, query_values, errors)
    """
    where_parts = []
    query_values: Dict[str, str] = {}
    errs: List[Exception] = []

    for name in sorted(columns):
        if name not in params:
            continue
        info = columns[name]
        value = params[name]
        if info.checker is not None:
            err = info.checker(value)
            if err is not None:
                errs.append(ValueError(f"{name}: {err}"))
                continue
        where_parts.append(f"{info.column}=:{name}")
        query_values[name] = value

    where = BASE_WHERE + " AND ".join(where_parts) if where_parts else ""

    order_by = ""
    orderby_param = params.get("orderby")
    if orderby_param:
        if orderby_param in columns:
            direction = "DESC" if params.get("sortOrder", "").lower() == "desc" else "ASC"
            order_by = f"{BASE_ORDER_BY}{columns[orderby_param].column} {direction}"
        else:
            logger.debug("orderby column %r is not filterable, ignoring", orderby_param)

    pagination = ""
    limit, err = _int_param(params, "limit", 1)
    if err:
        errs.append(err)
    offset, err = _int_param(params, "offset", 0)
    if err:
        errs.append(err)
    page, err = _int_param(params, "page", 1)
    if err:
        errs.append(err)

    if limit is not None:
        pagination = f"{BASE_LIMIT}{limit}"
        if offset is None and page is not None:
            offset = (page - 1) * limit
        if offset:
            pagination += f"{BASE_OFFSET}{offset}"

    return where, order_by, pagination, query_values, errs
