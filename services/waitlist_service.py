import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from models.waitlist import WaitlistUser, DEFAULT_GENDER, DEFAULT_AGE
from models.analytics import WaitlistAnalytics
from services.errors import ValidationError, DuplicateEmailError, ForbiddenError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED_FIELDS_MESSAGE = 'Name, email, and phone are required'
INVALID_EMAIL_MESSAGE = 'Invalid email format'


@dataclass
class SignupForm:
    name: str
    email: str
    phone: str
    gender: str = DEFAULT_GENDER
    age: str = DEFAULT_AGE
    referral_code: Optional[str] = None


def _clean(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def validate_signup(payload) -> SignupForm:
    """
    Validate a signup request body.

    Args:
        payload: Decoded JSON body (expected to be a dict)

    Returns:
        SignupForm: Cleaned fields with defaults applied

    Raises:
        ValidationError: On missing required fields or a malformed email
    """
    if not isinstance(payload, dict):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    name = _clean(payload.get('name'))
    email = _clean(payload.get('email'))
    phone = _clean(payload.get('phone'))

    if not name or not email or not phone:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    if not EMAIL_RE.match(email):
        raise ValidationError(INVALID_EMAIL_MESSAGE)

    return SignupForm(
        name=name,
        email=email,
        phone=phone,
        gender=_clean(payload.get('gender')) or DEFAULT_GENDER,
        age=_clean(payload.get('age')) or DEFAULT_AGE,
        referral_code=_clean(payload.get('referralCode')) or None,
    )


def find_by_email(session, email):
    return session.scalar(select(WaitlistUser.id).where(WaitlistUser.email == email))


def create_signup(session, form: SignupForm, ip_address: str, user_agent: str) -> WaitlistUser:
    """
    Store a new signup and bump the analytics counter in one transaction.

    The email lookup only short-circuits the common duplicate case; the
    unique constraint on ``waitlist_users.email`` is what guarantees
    uniqueness under concurrent writers, and its violation is reported the
    same way.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    if find_by_email(session, form.email) is not None:
        logger.info(f"Duplicate signup rejected for {form.email}")
        raise DuplicateEmailError()

    user = WaitlistUser(
        name=form.name,
        email=form.email,
        phone=form.phone,
        gender=form.gender,
        age=form.age,
        referral_code=form.referral_code,
        ip_address=ip_address,
        user_agent=user_agent,
    )

    try:
        session.add(user)
        session.flush()
        result = session.execute(
            update(WaitlistAnalytics).values(
                total_signups=WaitlistAnalytics.total_signups + 1,
                last_updated=datetime.utcnow(),
            )
        )
        if result.rowcount == 0:
            logger.warning("waitlist_analytics has no row; signup counted only in waitlist_users")
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.info(f"Duplicate signup caught by unique constraint for {form.email}")
        raise DuplicateEmailError()
    except Exception:
        session.rollback()
        raise

    logger.info(f"New waitlist signup: id={user.id} email={user.email}")
    return user


def get_count(session) -> int:
    return session.scalar(select(func.count()).select_from(WaitlistUser)) or 0


def get_analytics(session):
    return session.scalar(select(WaitlistAnalytics).order_by(WaitlistAnalytics.id).limit(1))


def list_signups(session, is_production: bool, limit: int = 100):
    """Newest signups first. Refused outright in production."""
    if is_production:
        raise ForbiddenError()
    query = (
        select(WaitlistUser)
        .order_by(WaitlistUser.created_at.desc(), WaitlistUser.id.desc())
        .limit(limit)
    )
    return list(session.scalars(query))
