from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fleet_ledger.core.security import (
    TokenData,
    create_access_token,
    get_current_user,
    hash_password,
    verify_password,
)
from fleet_ledger.db.session import get_db
from fleet_ledger.models.user import User
from fleet_ledger.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserRead

import logging

logger = logging.getLogger(__name__)

router = APIRouter()

def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user=UserRead.model_validate(user),
        access_token=create_access_token(user.id, user.email),
    )

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Create a merchant account and return a bearer token for it.
    """
    email = payload.email.lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already in use"
        )

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        name=payload.name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Account {user.id} created")
    return _auth_response(user)

@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Exchange email and password for a bearer token.
    """
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning("Rejected login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )
    return _auth_response(user)

@router.get("/me", response_model=UserRead)
def get_user_info(
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserRead:
    """
    Return the account behind the bearer token.
    """
    user = db.query(User).filter(User.id == current_user.user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
