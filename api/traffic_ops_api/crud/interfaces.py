"""Contracts between the generic CRUD engine and the resources it serves.

A resource implements :class:`CRUDer`: it declares its SQL, its keys and its
filterable query parameters, and the engine in :mod:`traffic_ops_api.crud.generic`
does the rest. Operations return their errors instead of raising them:

- create/update/delete return ``(user_err, sys_err, status)``
- read returns ``(results, user_err, sys_err, status)``

``user_err`` is safe to show the client; ``sys_err`` is logged and replaced
with a generic message.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from traffic_ops_api.models.user import TmUser

Result = Tuple[Optional[Exception], Optional[Exception], int]
ReadResult = Tuple[List[Any], Optional[Exception], Optional[Exception], int]


@dataclass
class APIInfo:
    """Per-request context: caller, query parameters and the open transaction."""
    user: TmUser
    tx: Session
    params: Dict[str, str] = field(default_factory=dict)

    def commit(self) -> None:
        self.tx.commit()

    def rollback(self) -> None:
        self.tx.rollback()


@dataclass(frozen=True)
class KeyFieldInfo:
    """A key field and the function that parses it from its query string form."""
    field: str
    func: Callable[[str], Any]


@dataclass(frozen=True)
class WhereColumnInfo:
    """Column a query parameter filters on, with an optional value checker."""
    column: str
    checker: Optional[Callable[[str], Optional[Exception]]] = None


class CRUDer(ABC):
    """A resource the generic engine can create, read, update and delete."""

    api_info: APIInfo

    # Identification

    @abstractmethod
    def get_keys(self) -> Tuple[Dict[str, Any], bool]:
        """Return the key values and whether they are actually set."""

    @abstractmethod
    def set_keys(self, keys: Dict[str, Any]) -> None:
        """Assign key values; raise BadKeyError when they are malformed."""

    @abstractmethod
    def get_key_fields_info(self) -> List[KeyFieldInfo]:
        ...

    @abstractmethod
    def get_type(self) -> str:
        """Name of the resource type, used in logs and messages."""

    @abstractmethod
    def get_audit_name(self) -> str:
        ...

    @abstractmethod
    def validate(self) -> Optional[Exception]:
        ...

    # Storage mapping

    @abstractmethod
    def param_columns(self) -> Dict[str, WhereColumnInfo]:
        ...

    @abstractmethod
    def insert_query(self) -> str:
        ...

    @abstractmethod
    def select_query(self) -> str:
        ...

    @abstractmethod
    def update_query(self) -> str:
        ...

    @abstractmethod
    def delete_query(self) -> str:
        ...

    @abstractmethod
    def new_read_obj(self, row) -> Any:
        """Build one read result from a row of ``select_query``."""

    @abstractmethod
    def bind_params(self) -> Dict[str, Any]:
        """Values for the named parameters of the insert and update queries."""

    @abstractmethod
    def set_last_updated(self, last_updated: datetime) -> None:
        ...

    @abstractmethod
    def load(self, body: Any) -> None:
        """Replace the resource's fields from a decoded request body.

        Raises pydantic.ValidationError when the body does not fit.
        """

    @abstractmethod
    def to_response(self) -> Any:
        """JSON-ready form of the resource for create/update responses."""

    # Lifecycle

    @abstractmethod
    def create(self) -> Result:
        ...

    @abstractmethod
    def read(self) -> ReadResult:
        ...

    @abstractmethod
    def update(self) -> Result:
        ...

    @abstractmethod
    def delete(self) -> Result:
        ...


CRUDFactory = Callable[[APIInfo], CRUDer]
