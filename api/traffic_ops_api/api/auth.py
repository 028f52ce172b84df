"""Authentication routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from traffic_ops_api.core.database import get_db
from traffic_ops_api.core.deps import get_current_user
from traffic_ops_api.core.security import authenticate_user, create_access_token
from traffic_ops_api.models.user import TmUser
from traffic_ops_api.schemas.user import LoginRequest, Token, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Login endpoint."""
    user = authenticate_user(db, login_data.username, login_data.password)
    if user is None:
        logger.info("failed login for %s", login_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    access_token = create_access_token(user.username)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: TmUser = Depends(get_current_user)):
    """Get current user info."""
    return current_user
