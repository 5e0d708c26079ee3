from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from tubely.auth import create_access_token, hash_password, verify_password
from tubely.config import Settings, get_settings
from tubely.database import get_db
from tubely.errors import APIError, ErrorKind
from tubely.models.user import User
from tubely.schemas.user import LoginRequest, LoginResponse, UserCreate, UserResponse

router = APIRouter(prefix="/api", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    """Register with email and password."""
    email = body.email.strip().lower()
    if not email:
        raise APIError(ErrorKind.BAD_REQUEST, "Email is required")
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise APIError(ErrorKind.BAD_REQUEST, f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if db.query(User).filter(func.lower(User.email) == email).first():
        raise APIError(ErrorKind.BAD_REQUEST, "Email already registered")
    user = User(email=email, password=hash_password(body.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Login with email and password."""
    email = body.email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if not user or not verify_password(body.password, user.password):
        raise APIError(ErrorKind.UNAUTHORIZED, "Incorrect email or password")
    return LoginResponse(
        token=create_access_token(user.id, settings),
        user=UserResponse.model_validate(user),
    )
