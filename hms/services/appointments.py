"""
Appointment lifecycle.

Status starts at PENDING and only changes through :func:`update_appointment`:

* COMPLETED is terminal for the status; notes, date and duration may
  still be edited as long as the requested status stays COMPLETED.
* CANCELLED is terminal for the whole record.
* COMPLETED appointments are never deleted.

Booking does not look at doctor availability and does not detect
overlapping appointments.
"""
import logging
from datetime import datetime
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from hms.exceptions import InvalidInput, InvalidSchedule, InvalidTransition, NotFound
from hms.models import Appointment, AppointmentStatus, Doctor, Patient
from hms.services.audit import log_action
from hms.services.text import strip_tags

logger = logging.getLogger(__name__)


def _clean(text: Optional[str]) -> str:
    return strip_tags(text)


def _check_duration(duration_minutes) -> int:
    if not isinstance(duration_minutes, int) or isinstance(duration_minutes, bool) or duration_minutes <= 0:
        raise InvalidInput('duration_minutes must be a positive integer')
    return duration_minutes


def _aware(when: datetime) -> datetime:
    # naive values are read in the current time zone
    if timezone.is_naive(when):
        return timezone.make_aware(when)
    return when


def get_appointment(appointment_id) -> Appointment:
    try:
        return Appointment.objects.get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise NotFound('appointment not found')


def list_appointments_for_patient(patient_id) -> List[Appointment]:
    return list(Appointment.objects.filter(patient_id=patient_id).order_by('-appointment_date'))


def list_appointments_for_doctor(doctor_id) -> List[Appointment]:
    return list(Appointment.objects.filter(doctor_id=doctor_id).order_by('-appointment_date'))


@transaction.atomic
def create_appointment(patient_id, doctor_id, when: datetime, duration_minutes: int, notes: str = '', *,
                       actor=None) -> Appointment:
    if not Patient.objects.filter(id=patient_id).exists():
        raise NotFound('patient not found')
    if not Doctor.objects.filter(id=doctor_id).exists():
        raise NotFound('doctor not found')
    when = _aware(when)
    if when <= timezone.now():
        raise InvalidSchedule('appointment date must be in the future')
    _check_duration(duration_minutes)

    appt = Appointment.objects.create(
        patient_id=patient_id,
        doctor_id=doctor_id,
        appointment_date=when,
        duration_minutes=duration_minutes,
        status=AppointmentStatus.PENDING,
        notes=_clean(notes),
    )
    log_action(actor=actor, action='appointment.create', object_type='appointment', object_id=appt.id,
               detail={'patient_id': str(patient_id), 'doctor_id': str(doctor_id)})
    logger.info("appointment created", extra={'appointment_id': str(appt.id), 'doctor_id': str(doctor_id)})
    return appt


def _check_transition(current: str, requested: str) -> None:
    if current == AppointmentStatus.COMPLETED and requested != AppointmentStatus.COMPLETED:
        raise InvalidTransition('cannot change status of completed appointment')
    if current == AppointmentStatus.CANCELLED:
        raise InvalidTransition('cannot update cancelled appointment')


@transaction.atomic
def update_appointment(appointment_id, when: datetime, duration_minutes: int, status: str, notes: str = '', *,
                       actor=None) -> Appointment:
    try:
        appt = Appointment.objects.select_for_update().get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise NotFound('appointment not found')

    previous = appt.status
    _check_transition(previous, status)
    if status not in AppointmentStatus.values:
        raise InvalidInput('invalid appointment status')
    _check_duration(duration_minutes)

    appt.appointment_date = _aware(when)
    appt.duration_minutes = duration_minutes
    appt.status = status
    appt.notes = _clean(notes)
    appt.save()

    log_action(actor=actor, action='appointment.update', object_type='appointment', object_id=appt.id,
               detail={'from': previous, 'to': status})
    if previous != status:
        logger.info("appointment status changed",
                    extra={'appointment_id': str(appt.id), 'from': previous, 'to': status})
    return appt


@transaction.atomic
def delete_appointment(appointment_id, *, actor=None) -> None:
    try:
        appt = Appointment.objects.select_for_update().get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise NotFound('appointment not found')
    if appt.status == AppointmentStatus.COMPLETED:
        raise InvalidTransition('cannot delete completed appointment')

    # 先记录审计，再删除
    log_action(actor=actor, action='appointment.delete', object_type='appointment', object_id=appt.id,
               detail={'status': appt.status})
    appt.delete()
