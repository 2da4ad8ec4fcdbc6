"""
Doctor and nurse profiles.

A profile can only be attached to an existing user whose role matches,
and each user has at most one profile of a kind.  The one-to-one column
enforces the latter in the database as well.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from hms.exceptions import Conflict, InvalidInput, NotFound
from hms.models import Department, Doctor, Nurse, Role
from hms.services.audit import log_action

User = get_user_model()


def _user_with_role(user_id, role: Role, label: str) -> User:
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFound('user not found')
    if user.role != role:
        raise InvalidInput(f'user is not a {label}')
    return user


def _active_department(department_id) -> Department:
    dept = Department.objects.filter(id=department_id, is_active=True).first()
    if dept is None:
        raise NotFound('department not found')
    return dept


def create_doctor(*, user_id, specialization: str, license_number: str, department_id,
                  consultation_fee: Decimal, is_available: bool = True, actor=None) -> Doctor:
    user = _user_with_role(user_id, Role.DOCTOR, 'doctor')
    if Doctor.objects.filter(user=user).exists():
        raise Conflict('doctor already exists for this user')
    dept = _active_department(department_id)
    if consultation_fee is None or consultation_fee <= 0:
        raise InvalidInput('consultation_fee must be greater than 0')
    try:
        with transaction.atomic():
            doctor = Doctor.objects.create(
                user=user, specialization=specialization, license_number=license_number,
                department=dept, consultation_fee=consultation_fee, is_available=is_available,
            )
            log_action(actor=actor, action='doctor.create', object_type='doctor', object_id=doctor.id,
                       detail={'user_id': str(user.id)})
    except IntegrityError:
        raise Conflict('doctor already exists for this user')
    return doctor


def create_nurse(*, user_id, license_number: str, department_id, shift: str, actor=None) -> Nurse:
    user = _user_with_role(user_id, Role.NURSE, 'nurse')
    if Nurse.objects.filter(user=user).exists():
        raise Conflict('nurse already exists for this user')
    dept = _active_department(department_id)
    try:
        with transaction.atomic():
            nurse = Nurse.objects.create(user=user, license_number=license_number, department=dept, shift=shift)
            log_action(actor=actor, action='nurse.create', object_type='nurse', object_id=nurse.id,
                       detail={'user_id': str(user.id)})
    except IntegrityError:
        raise Conflict('nurse already exists for this user')
    return nurse
