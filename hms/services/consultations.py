"""
Consultation workflow.

A consultation may only be written for a COMPLETED appointment, at most
once per appointment, and must name the same patient and doctor as the
appointment.  Checks run in that order so callers get a stable error for
a given situation:

    appointment missing      -> NotFound
    appointment not complete -> InvalidState
    consultation exists      -> Conflict
    patient/doctor mismatch  -> InvalidInput

The one-consultation rule is also a unique constraint on the table; two
concurrent creators both passing the lookup end with the loser getting
the same ``Conflict``.

``is_editable`` starts true and nothing in the API clears it, so
consultations remain editable.  Locked rows (flag cleared directly in the
database or through the admin) reject updates with ``NotEditable``.
"""
import logging
from typing import List, Optional

from django.db import IntegrityError, transaction

from hms.exceptions import Conflict, InvalidInput, InvalidState, NotEditable, NotFound
from hms.models import Appointment, AppointmentStatus, Consultation
from hms.services.audit import log_action
from hms.services.text import strip_tags

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = 'consultation already exists for this appointment'


def _clean(text: Optional[str]) -> str:
    return strip_tags(text)


def _require_diagnosis(diagnosis: Optional[str]) -> str:
    cleaned = _clean(diagnosis).strip()
    if not cleaned:
        raise InvalidInput('diagnosis is required')
    return cleaned


def get_consultation(consultation_id) -> Consultation:
    try:
        return Consultation.objects.get(id=consultation_id)
    except Consultation.DoesNotExist:
        raise NotFound('consultation not found')


def get_consultation_for_appointment(appointment_id) -> Consultation:
    try:
        return Consultation.objects.get(appointment_id=appointment_id)
    except Consultation.DoesNotExist:
        raise NotFound('consultation not found')


def list_consultations_for_patient(patient_id) -> List[Consultation]:
    return list(Consultation.objects.filter(patient_id=patient_id).order_by('-created_at'))


@transaction.atomic
def create_consultation(appointment_id, patient_id, doctor_id, diagnosis: str, notes: str = '', *,
                        actor=None) -> Consultation:
    try:
        appt = Appointment.objects.get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise NotFound('appointment not found')

    if appt.status != AppointmentStatus.COMPLETED:
        raise InvalidState('consultation can only be created for completed appointments')

    if Consultation.objects.filter(appointment_id=appt.id).exists():
        raise Conflict(CONFLICT_MESSAGE)

    if str(patient_id) != str(appt.patient_id) or str(doctor_id) != str(appt.doctor_id):
        raise InvalidInput('patient and doctor must match the appointment')

    diagnosis = _require_diagnosis(diagnosis)
    try:
        with transaction.atomic():
            consult = Consultation.objects.create(
                appointment=appt,
                patient_id=appt.patient_id,
                doctor_id=appt.doctor_id,
                diagnosis=diagnosis,
                notes=_clean(notes),
                is_editable=True,
            )
    except IntegrityError:
        logger.warning("duplicate consultation insert", extra={'appointment_id': str(appt.id)})
        raise Conflict(CONFLICT_MESSAGE)

    log_action(actor=actor, action='consultation.create', object_type='consultation', object_id=consult.id,
               detail={'appointment_id': str(appt.id)})
    return consult


@transaction.atomic
def update_consultation(consultation_id, diagnosis: str, notes: str = '', *, actor=None) -> Consultation:
    try:
        consult = Consultation.objects.select_for_update().get(id=consultation_id)
    except Consultation.DoesNotExist:
        raise NotFound('consultation not found')
    if not consult.is_editable:
        raise NotEditable('consultation is not editable')

    consult.diagnosis = _require_diagnosis(diagnosis)
    consult.notes = _clean(notes)
    consult.save(update_fields=['diagnosis', 'notes'])

    log_action(actor=actor, action='consultation.update', object_type='consultation', object_id=consult.id)
    return consult
