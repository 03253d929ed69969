from datetime import date, datetime
import logging
import re

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from ..constants import GENDERS, LINKEDIN_PATTERN, PHONE_PATTERN
from ..database import get_db
from ..models.profile import Profile
from ..services.profiles import create_profile, get_profile_by_email, get_user, update_profile
from ..utils.dependencies import current_user_id, get_current_user
from ..utils.error_handlers import get_error_message, handle_database_error
from ..utils.jwt import create_access_token
from ..utils.security import hash_password, verify_password
from ..utils.validation import validate_email, validate_password, validate_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class SignupRequest(BaseModel):
    email: str
    password: str
    role: str  # recruiter / job_seeker
    full_name: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str
    role: str | None = None  # optional role gate (frontend-selected role)


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)
    website: str | None = Field(default=None, max_length=255)
    company_name: str | None = Field(default=None, max_length=255)
    gender: str | None = None
    domicile: str | None = Field(default=None, max_length=120)
    phone_number: str | None = Field(default=None, max_length=30)
    linkedin_url: str | None = Field(default=None, max_length=255)
    date_of_birth: date | None = None

    @field_validator("gender")
    @classmethod
    def _check_gender(cls, v: str | None) -> str | None:
        if v and v not in GENDERS:
            raise ValueError(f"Gender must be one of: {', '.join(GENDERS)}")
        return v or None

    @field_validator("phone_number")
    @classmethod
    def _check_phone(cls, v: str | None) -> str | None:
        if v and not re.match(PHONE_PATTERN, v):
            raise ValueError("Invalid phone number")
        return v or None

    @field_validator("linkedin_url")
    @classmethod
    def _check_linkedin(cls, v: str | None) -> str | None:
        if v and not re.match(LINKEDIN_PATTERN, v):
            raise ValueError("LinkedIn link must look like https://linkedin.com/in/<username>")
        return v or None


def _profile_to_public(profile: Profile) -> dict:
    return {
        "id": profile.id,
        "email": profile.email,
        "role": profile.role,
        "full_name": profile.full_name,
        "username": profile.username,
        "avatar_url": profile.avatar_url,
        "website": profile.website,
        "company_name": profile.company_name,
        "gender": profile.gender,
        "domicile": profile.domicile,
        "phone_number": profile.phone_number,
        "linkedin_url": profile.linkedin_url,
        "date_of_birth": profile.date_of_birth.isoformat() if profile.date_of_birth else None,
        "updated_at": profile.updated_at.isoformat() if isinstance(profile.updated_at, datetime) else profile.updated_at,
    }


def _token_response(profile: Profile) -> dict:
    try:
        token = create_access_token({"sub": str(profile.id), "role": profile.role})
    except Exception as e:
        logger.error(f"Token creation error: {e}")
        raise HTTPException(status_code=500, detail=get_error_message("server_error"))
    return {
        "user": {"id": profile.id, "email": profile.email, "role": profile.role},
        "access_token": token,
        "token_type": "bearer",
    }


@router.post("/signup")
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    email = validate_email(payload.email)
    validate_password(payload.password)
    role = validate_role(payload.role)

    try:
        existing = get_profile_by_email(db, email)
    except Exception as e:
        raise handle_database_error(e, "checking existing profile")
    if existing:
        raise HTTPException(status_code=400, detail=get_error_message("email_exists"))

    try:
        hashed = hash_password(payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    full_name = (payload.full_name or "").strip() or None
    profile = create_profile(db, email=email, password_hash=hashed, role=role, full_name=full_name)

    return {"message": "User created successfully", **_token_response(profile)}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    email = validate_email(payload.email)
    if not payload.password:
        raise HTTPException(status_code=400, detail="Password is required")

    try:
        profile = get_profile_by_email(db, email)
    except Exception as e:
        raise handle_database_error(e, "login")

    if not profile or not verify_password(payload.password, profile.password):
        raise HTTPException(status_code=401, detail=get_error_message("invalid_credentials"))

    if payload.role and profile.role != payload.role:
        raise HTTPException(status_code=403, detail=get_error_message("role_mismatch"))

    return _token_response(profile)


@router.post("/logout")
def logout():
    # Tokens are stateless; the client drops its copy.
    return {"message": "Logged out successfully"}


@router.get("/me")
def me(db: Session = Depends(get_db), user=Depends(get_current_user)):
    profile = get_user(db, current_user_id(user))
    if profile is None:
        # Token outlived its profile.
        raise HTTPException(status_code=401, detail=get_error_message("session_expired"))
    return {"success": True, "user": _profile_to_public(profile)}


@router.patch("/me")
def update_me(payload: ProfileUpdate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    profile = get_user(db, current_user_id(user))
    if profile is None:
        raise HTTPException(status_code=401, detail=get_error_message("session_expired"))
    changes = {name: getattr(payload, name) for name in payload.model_fields_set}
    profile = update_profile(db, profile, changes)
    return {"success": True, "user": _profile_to_public(profile)}
