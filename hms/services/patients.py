import re
from datetime import date, datetime
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from hms.exceptions import Conflict, InvalidInput, NotFound
from hms.models import Patient, Role
from hms.services.audit import log_action
from hms.services.text import strip_tags

User = get_user_model()

_ORDINAL_RE = re.compile(r'^(\d{1,2})(st|nd|rd|th)\b', re.IGNORECASE)


def parse_date_of_birth(value) -> date:
    """Accept ``YYYY-MM-DD`` or the long form ``2nd January 2006``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = (value or '').strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    text = _ORDINAL_RE.sub(r'\1', text)
    try:
        return datetime.strptime(text, '%d %B %Y').date()
    except ValueError:
        raise InvalidInput('invalid date of birth format')


def create_patient_profile(*, user_id, date_of_birth, gender: str = '', blood_group: str = '',
                           emergency_contact_name: str = '', emergency_contact_phone: str = '',
                           medical_history: str = '', actor=None) -> Patient:
    dob = parse_date_of_birth(date_of_birth)
    if dob > timezone.localdate():
        raise InvalidInput('date of birth cannot be in the future')

    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFound('user not found')
    if user.role != Role.PATIENT:
        raise InvalidInput('user is not a patient')
    if Patient.objects.filter(user=user).exists():
        raise Conflict('patient already exists for this user')

    try:
        with transaction.atomic():
            patient = Patient.objects.create(
                user=user,
                date_of_birth=dob,
                gender=gender or '',
                blood_group=blood_group or '',
                emergency_contact_name=emergency_contact_name or '',
                emergency_contact_phone=emergency_contact_phone or '',
                medical_history=strip_tags(medical_history),
            )
            log_action(actor=actor, action='patient.create', object_type='patient', object_id=patient.id)
    except IntegrityError:
        raise Conflict('patient already exists for this user')
    return patient


def get_patient_for_user(user_id) -> Optional[Patient]:
    return Patient.objects.filter(user_id=user_id).first()
