import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.profile import Profile
from ..utils.error_handlers import ValidationError, get_error_message, handle_database_error

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile.
EDITABLE_FIELDS = (
    "full_name",
    "username",
    "avatar_url",
    "website",
    "company_name",
    "gender",
    "domicile",
    "phone_number",
    "linkedin_url",
    "date_of_birth",
)


def get_user(db: Session, user_id: int | None) -> Profile | None:
    if user_id is None:
        return None
    return db.query(Profile).filter(Profile.id == int(user_id)).first()


def get_profile_by_email(db: Session, email: str) -> Profile | None:
    return db.query(Profile).filter(Profile.email == email).first()


def create_profile(db: Session, *, email: str, password_hash: str, role: str, full_name: str | None) -> Profile:
    profile = Profile(email=email, password=password_hash, role=role, full_name=full_name)
    try:
        db.add(profile)
        db.commit()
        db.refresh(profile)
    except IntegrityError:
        # Lost a signup race for the same address.
        db.rollback()
        raise ValidationError(get_error_message("email_exists")) from None
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating profile") from e
    logger.info("Created %s profile %s", role, profile.id)
    return profile


def update_profile(db: Session, profile: Profile, changes: dict) -> Profile:
    for name, value in changes.items():
        if name in EDITABLE_FIELDS:
            setattr(profile, name, value)
    try:
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "updating profile") from e
    return profile
