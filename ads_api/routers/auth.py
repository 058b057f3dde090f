"""Auth router: seller registration, login and profile."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRES_MINUTES
from ..db import get_db
from ..models import User
from ..schemas.auth import LoginRequest, RegistrationRequest, TokenResponse, UserPublic
from ..security.jwt import create_access_token, get_current_user
from ..security.passwords import hash_password, password_policy_error, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=201)
def register_user(request: RegistrationRequest, db: Session = Depends(get_db)):
    """Register a seller account in a tenant."""
    email = request.email.lower().strip()

    if db.query(User).filter(func.lower(User.email) == email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    policy_error = password_policy_error(request.password)
    if policy_error:
        raise HTTPException(status_code=400, detail=policy_error)

    user = User(
        tenant_id=request.tenant_id.strip(),
        email=email,
        password_hash=hash_password(request.password),
        role="seller",
        is_active=True,
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")

    return UserPublic.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login_user(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a short-lived access token."""
    email = request.email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Inactive account")
    if not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    claims = {
        "sub": str(user.id),
        "email": email,
        "tenant_id": user.tenant_id,
        "role": user.role,
        "token_type": "access",
    }
    return {
        "access_token": create_access_token(claims),
        "token_type": "bearer",
        "expires_in": ACCESS_TOKEN_EXPIRES_MINUTES * 60,
    }


@router.get("/me", response_model=UserPublic)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user
