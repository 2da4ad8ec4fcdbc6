import logging
import re
from typing import List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from hms.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from hms.models import Role
from hms.services.audit import log_action
from hms.services.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

User = get_user_model()

EMAIL_RE = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
STAFF_ROLES = (Role.DOCTOR, Role.NURSE, Role.ADMIN)
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def _validate_account(username, email, password, first_name, last_name) -> None:
    if not username:
        raise InvalidInput('username is required')
    if len(username) < 3:
        raise InvalidInput('username must be at least 3 characters')
    if not email:
        raise InvalidInput('email is required')
    if not EMAIL_RE.match(email):
        raise InvalidInput('invalid email format')
    if not password:
        raise InvalidInput('password is required')
    if len(password) < 8:
        raise InvalidInput('password must be at least 8 characters')
    if not first_name:
        raise InvalidInput('first name is required')
    if not last_name:
        raise InvalidInput('last name is required')


def _ensure_unique(username: str, email: str) -> None:
    if User.objects.filter(email__iexact=email).exists():
        raise Conflict('email already registered')
    if User.objects.filter(username=username).exists():
        raise Conflict('username already taken')


def _create_user(*, username, email, password, first_name, last_name, phone, role, actor) -> User:
    _ensure_unique(username, email)
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username, email=email, password=password,
                first_name=first_name, last_name=last_name, phone=phone or '',
                role=role, is_staff=(role == Role.ADMIN),
            )
            log_action(actor=actor or user, action='user.create', object_type='user', object_id=user.id,
                       detail={'role': role})
    except IntegrityError:
        # lost a race against a concurrent signup with the same email or username
        raise Conflict('email or username already registered')
    logger.info("user created", extra={'user_id': str(user.id), 'role': role})
    return user


def signup_patient(*, username: str, email: str, password: str, first_name: str, last_name: str,
                   phone: str = '') -> User:
    """Public self registration.  The role is always PATIENT."""
    _validate_account(username, email, password, first_name, last_name)
    return _create_user(username=username, email=email, password=password, first_name=first_name,
                        last_name=last_name, phone=phone, role=Role.PATIENT, actor=None)


def create_staff_user(*, username: str, email: str, password: str, first_name: str, last_name: str,
                      role: str, phone: str = '', actor=None) -> User:
    """Administrator creates a doctor, nurse or another administrator."""
    _validate_account(username, email, password, first_name, last_name)
    if not role:
        raise InvalidInput('role is required')
    if role == Role.PATIENT:
        raise InvalidInput('patients must self-register using the patient signup endpoint')
    if role not in STAFF_ROLES:
        raise InvalidInput(f'invalid role: {role}. must be one of: DOCTOR, NURSE, ADMIN')
    return _create_user(username=username, email=email, password=password, first_name=first_name,
                        last_name=last_name, phone=phone, role=Role(role), actor=actor)


def login(email: str, password: str, token_service: Optional[TokenService] = None) -> Tuple[str, User]:
    user = User.objects.filter(email__iexact=email).first() if email else None
    if user is None or not user.is_active or not user.check_password(password or ''):
        logger.info("login rejected", extra={'email': email})
        raise Unauthorized('invalid credentials')
    token = (token_service or get_token_service()).issue(user.id, user.role)
    log_action(actor=user, action='auth.login', object_type='user', object_id=user.id)
    return token, user


def get_user(user_id) -> User:
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFound('user not found')


def list_users(limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[List[User], int]:
    """Return a page of users, newest first, and the total count.

    A limit outside 1..100 falls back to the default of 10; a negative
    offset is treated as 0.
    """
    if not limit or limit <= 0 or limit > MAX_PAGE_LIMIT:
        limit = DEFAULT_PAGE_LIMIT
    if not offset or offset < 0:
        offset = 0
    qs = User.objects.order_by('-created_at')
    return list(qs[offset:offset + limit]), qs.count()
