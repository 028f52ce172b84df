"""HTTP handlers shared by every CRUD resource.

Routes hand a resource factory and the request context to one of these; the
handler runs the operation, writes the change log, closes the transaction and
renders the result as a Traffic Ops style ``alerts``/``response`` body.
"""
import json
import logging
from http import HTTPStatus
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from traffic_ops_api.crud.changelog import API_CHANGE, CREATED, DELETED, UPDATED, create_change_log
from traffic_ops_api.crud.interfaces import APIInfo, CRUDer, CRUDFactory
from traffic_ops_api.crud.validators import BadKeyError

logger = logging.getLogger(__name__)

SUCCESS_LEVEL = "success"
ERROR_LEVEL = "error"


def alerts(text: str, level: str) -> dict:
    return {"alerts": [{"text": text, "level": level}]}


def handle_err(
    inf: APIInfo,
    status: int,
    user_err: Optional[Exception],
    sys_err: Optional[Exception],
) -> JSONResponse:
    """Roll back the request and render an error; server errors are only logged."""
    inf.rollback()
    if sys_err is not None:
        logger.error("user %s: %s", inf.user.username, sys_err)
    if user_err is not None:
        text = str(user_err)
    else:
        text = HTTPStatus(status).phrase
    return JSONResponse(status_code=status, content=alerts(text, ERROR_LEVEL))


def write_success(inf: APIInfo, obj: CRUDer, action: str, message: str, response: Any = None) -> JSONResponse:
    """Log the change, commit and render a success alert."""
    create_change_log(inf.tx, API_CHANGE, action, obj, inf.user)
    inf.commit()
    body = alerts(message, SUCCESS_LEVEL)
    if response is not None:
        body["response"] = jsonable_encoder(response)
    return JSONResponse(status_code=200, content=body)


def set_keys_from_params(obj: CRUDer, params: dict) -> Optional[Exception]:
    """Parse the resource's key fields from the query string into ``obj``."""
    keys = {}
    for info in obj.get_key_fields_info():
        raw = params.get(info.field)
        if raw is None:
            return ValueError(f"missing key: {info.field}")
        try:
            keys[info.field] = info.func(raw)
        except ValueError as err:
            return ValueError(f"failed to parse key {info.field}: {err}")
    try:
        obj.set_keys(keys)
    except BadKeyError as err:
        return err
    return None


def decode_body(obj: CRUDer, raw: bytes) -> Optional[Exception]:
    """Decode a JSON object request body into ``obj``."""
    try:
        body = json.loads(raw) if raw else None
    except ValueError as err:
        # JSONDecodeError, or UnicodeDecodeError for bytes that are not text
        return ValueError(f"error parsing request body: {err}")
    if not isinstance(body, dict):
        return ValueError("error parsing request body: expected a JSON object")
    try:
        obj.load(body)
    except ValidationError as err:
        return ValueError(f"error parsing request body: {err.errors()[0]['msg']}")
    return None


def read_handler(factory: CRUDFactory, inf: APIInfo) -> JSONResponse:
    obj = factory(inf)
    results, user_err, sys_err, status = obj.read()
    if user_err is not None or sys_err is not None:
        return handle_err(inf, status, user_err, sys_err)
    inf.commit()
    return JSONResponse(status_code=200, content={"response": jsonable_encoder(results)})


def create_handler(factory: CRUDFactory, inf: APIInfo, raw: bytes) -> JSONResponse:
    obj = factory(inf)
    err = decode_body(obj, raw)
    if err is None:
        err = obj.validate()
    if err is not None:
        return handle_err(inf, 400, err, None)

    user_err, sys_err, status = obj.create()
    if user_err is not None or sys_err is not None:
        return handle_err(inf, status, user_err, sys_err)
    return write_success(inf, obj, CREATED, f"{obj.get_type()} was created.", obj.to_response())


def update_handler(factory: CRUDFactory, inf: APIInfo, raw: bytes) -> JSONResponse:
    obj = factory(inf)
    err = decode_body(obj, raw)
    if err is None:
        # keys in the query string win over any in the body
        err = set_keys_from_params(obj, inf.params)
    if err is None:
        err = obj.validate()
    if err is not None:
        return handle_err(inf, 400, err, None)

    user_err, sys_err, status = obj.update()
    if user_err is not None or sys_err is not None:
        return handle_err(inf, status, user_err, sys_err)
    return write_success(inf, obj, UPDATED, f"{obj.get_type()} was updated.", obj.to_response())


def delete_handler(factory: CRUDFactory, inf: APIInfo) -> JSONResponse:
    obj = factory(inf)
    err = set_keys_from_params(obj, inf.params)
    if err is not None:
        return handle_err(inf, 400, err, None)

    user_err, sys_err, status = obj.delete()
    if user_err is not None or sys_err is not None:
        return handle_err(inf, status, user_err, sys_err)
    return write_success(inf, obj, DELETED, f"{obj.get_type()} was deleted.")
