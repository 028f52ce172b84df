"""FastAPI dependencies for the authenticated caller and request context."""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from traffic_ops_api.core.database import get_db
from traffic_ops_api.core.security import username_from_token
from traffic_ops_api.crud.interfaces import APIInfo
from traffic_ops_api.models.user import TmUser

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> TmUser:
    """Resolve the bearer token to a user, or reject the request with 401."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    username = username_from_token(credentials.credentials)
    if username is None:
        raise credentials_exception

    user = db.query(TmUser).filter(TmUser.username == username).first()
    if user is None:
        raise credentials_exception
    return user


def get_api_info(
    request: Request,
    db: Session = Depends(get_db),
    current_user: TmUser = Depends(get_current_user)
) -> APIInfo:
    """Bind the caller, query parameters and transaction for one request."""
    return APIInfo(user=current_user, tx=db, params=dict(request.query_params))


async def get_raw_body(request: Request) -> bytes:
    """The undecoded request body; resources decode and report errors themselves."""
    return await request.body()
