"""API change log entries for successful writes."""
from sqlalchemy.orm import Session

from traffic_ops_api.crud.interfaces import CRUDer
from traffic_ops_api.models.change_log import ChangeLog
from traffic_ops_api.models.user import TmUser

API_CHANGE = "APICHANGE"

CREATED = "Created"
UPDATED = "Updated"
DELETED = "Deleted"


def format_keys(keys: dict) -> str:
    return "{" + " ".join(f"{name}:{value}" for name, value in sorted(keys.items())) + "}"


def create_change_log(db: Session, level: str, action: str, obj: CRUDer, user: TmUser) -> ChangeLog:
    """Record ``action`` on ``obj`` in the request's transaction."""
    keys, _ = obj.get_keys()
    entry = ChangeLog(
        level=level,
        message=f"{action} {obj.get_type()}: {obj.get_audit_name()} keys: {format_keys(keys)}",
        tm_user=user.id,
    )
    db.add(entry)
    return entry
