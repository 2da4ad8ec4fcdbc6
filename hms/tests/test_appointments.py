"""
Appointment lifecycle: booking rules, status transitions and deletion
guards, exercised both through the service functions and over HTTP.
"""
import uuid
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from hms.exceptions import InvalidInput, InvalidSchedule, InvalidTransition, NotFound
from hms.models import Appointment, AppointmentStatus, AuditEvent
from hms.services import appointments as svc

pytestmark = pytest.mark.django_db


@pytest.fixture
def appt(patient, doctor, tomorrow_10):
    return svc.create_appointment(patient.id, doctor.id, tomorrow_10, 30, 'first visit')


def _update(appt, status, notes=None, when=None):
    notes = appt.notes if notes is None else notes
    return svc.update_appointment(appt.id, when or appt.appointment_date, appt.duration_minutes, status, notes)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

def test_create_starts_pending(appt):
    assert appt.status == AppointmentStatus.PENDING
    assert appt.created_at is not None and appt.updated_at is not None


def test_create_rejects_past_and_present(patient, doctor):
    with pytest.raises(InvalidSchedule):
        svc.create_appointment(patient.id, doctor.id, timezone.now() - timedelta(minutes=1), 30)
    assert Appointment.objects.count() == 0


def test_create_requires_existing_patient_and_doctor(patient, doctor, tomorrow_10):
    with pytest.raises(NotFound, match='patient'):
        svc.create_appointment(uuid.uuid4(), doctor.id, tomorrow_10, 30)
    with pytest.raises(NotFound, match='doctor'):
        svc.create_appointment(patient.id, uuid.uuid4(), tomorrow_10, 30)


def test_create_rejects_non_positive_duration(patient, doctor, tomorrow_10):
    with pytest.raises(InvalidInput):
        svc.create_appointment(patient.id, doctor.id, tomorrow_10, 0)


def test_double_booking_is_allowed(appt, patient, doctor, tomorrow_10):
    svc.create_appointment(patient.id, doctor.id, tomorrow_10, 30)
    assert Appointment.objects.filter(doctor=doctor, appointment_date=tomorrow_10).count() == 2


def test_completed_status_is_terminal(appt):
    _update(appt, AppointmentStatus.COMPLETED)
    for status in (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED):
        with pytest.raises(InvalidTransition):
            _update(appt, status)
    assert Appointment.objects.get(id=appt.id).status == AppointmentStatus.COMPLETED


def test_completed_allows_editing_other_fields(appt):
    _update(appt, AppointmentStatus.COMPLETED)
    later = appt.appointment_date + timedelta(days=2)
    updated = _update(appt, AppointmentStatus.COMPLETED, notes='follow-up booked', when=later)
    assert updated.notes == 'follow-up booked'
    assert updated.appointment_date == later


def test_cancelled_is_fully_terminal(appt):
    _update(appt, AppointmentStatus.CANCELLED)
    for status in AppointmentStatus.values:
        with pytest.raises(InvalidTransition):
            _update(appt, status, notes='changed')
    assert Appointment.objects.get(id=appt.id).notes == 'first visit'


def test_update_refreshes_updated_at(appt):
    before = appt.updated_at
    updated = _update(appt, AppointmentStatus.CONFIRMED)
    assert updated.updated_at >= before
    assert updated.status == AppointmentStatus.CONFIRMED


def test_update_missing_is_not_found():
    with pytest.raises(NotFound):
        svc.update_appointment(uuid.uuid4(), timezone.now(), 30, AppointmentStatus.PENDING)


def test_completed_is_never_deleted(appt):
    _update(appt, AppointmentStatus.COMPLETED)
    with pytest.raises(InvalidTransition):
        svc.delete_appointment(appt.id)
    assert Appointment.objects.filter(id=appt.id).exists()


def test_delete_cancelled_then_everything_is_not_found(appt):
    _update(appt, AppointmentStatus.CANCELLED)
    svc.delete_appointment(appt.id)
    with pytest.raises(NotFound):
        svc.delete_appointment(appt.id)
    with pytest.raises(NotFound):
        svc.get_appointment(appt.id)


def test_lists_are_newest_date_first(patient, doctor, tomorrow_10):
    a1 = svc.create_appointment(patient.id, doctor.id, tomorrow_10, 30)
    a2 = svc.create_appointment(patient.id, doctor.id, tomorrow_10 + timedelta(days=3), 30)
    assert [a.id for a in svc.list_appointments_for_patient(patient.id)] == [a2.id, a1.id]
    assert [a.id for a in svc.list_appointments_for_doctor(doctor.id)] == [a2.id, a1.id]
    assert svc.list_appointments_for_patient(uuid.uuid4()) == []


def test_writes_are_audited(appt):
    _update(appt, AppointmentStatus.CANCELLED)
    svc.delete_appointment(appt.id)
    actions = list(AuditEvent.objects.filter(object_id=str(appt.id)).values_list('action', flat=True))
    assert sorted(actions) == ['appointment.create', 'appointment.delete', 'appointment.update']


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def test_book_then_fetch_round_trip(patient_client, patient, doctor, tomorrow_10):
    body = {
        'patient_id': str(patient.id),
        'doctor_id': str(doctor.id),
        'appointment_date': tomorrow_10.isoformat(),
        'duration_minutes': 30,
        'notes': 'chest pain',
    }
    r = patient_client.post(reverse('appointments'), body, format='json')
    assert r.status_code == 201
    assert r.data['status'] == 'PENDING'

    fetched = patient_client.get(reverse('appointment-detail', args=[r.data['appointment_id']]))
    assert fetched.status_code == 200
    assert fetched.data == r.data
    assert parse_datetime(fetched.data['appointment_date']) == tomorrow_10
    assert fetched.data['created_at'] and fetched.data['updated_at']
    # reads are idempotent
    assert patient_client.get(reverse('appointment-detail', args=[r.data['appointment_id']])).data == fetched.data


def test_booking_in_the_past_is_rejected_over_http(patient_client, patient, doctor):
    body = {
        'patient_id': str(patient.id),
        'doctor_id': str(doctor.id),
        'appointment_date': (timezone.now() - timedelta(days=1)).isoformat(),
        'duration_minutes': 30,
    }
    r = patient_client.post(reverse('appointments'), body, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'appointment date must be in the future'}
    assert Appointment.objects.count() == 0


def test_validation_errors_name_the_field(patient_client, patient, doctor, tomorrow_10):
    body = {'patient_id': 'nope', 'doctor_id': str(doctor.id), 'appointment_date': tomorrow_10.isoformat(),
            'duration_minutes': 30}
    r = patient_client.post(reverse('appointments'), body, format='json')
    assert r.status_code == 400
    assert r.data['error'].startswith('patient_id: ')


def test_update_over_http_reports_transition_errors(doctor_client, appt):
    url = reverse('appointment-detail', args=[appt.id])
    body = {'appointment_date': appt.appointment_date.isoformat(), 'duration_minutes': 45, 'status': 'COMPLETED'}
    assert doctor_client.put(url, body, format='json').status_code == 200
    body['status'] = 'PENDING'
    r = doctor_client.put(url, body, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'cannot change status of completed appointment'}


def test_unknown_appointment_is_404(patient_client):
    r = patient_client.get(reverse('appointment-detail', args=[uuid.uuid4()]))
    assert r.status_code == 404
    assert r.data == {'error': 'appointment not found'}


def test_list_requires_a_filter(patient_client, appt, patient):
    assert patient_client.get(reverse('appointments')).status_code == 400
    r = patient_client.get(reverse('appointments'), {'patient_id': str(patient.id)})
    assert r.status_code == 200
    assert [a['appointment_id'] for a in r.data] == [str(appt.id)]


def test_cancelled_rejects_even_unknown_status(appt):
    _update(appt, AppointmentStatus.CANCELLED)
    with pytest.raises(InvalidTransition):
        _update(appt, 'BOGUS')


def test_unknown_status_on_open_appointment_is_invalid_input(appt):
    with pytest.raises(InvalidInput):
        _update(appt, 'BOGUS')


def test_naive_datetimes_are_read_in_current_time_zone(patient, doctor):
    future = (timezone.now() + timedelta(days=2)).replace(tzinfo=None, microsecond=0)
    created = svc.create_appointment(patient.id, doctor.id, future, 30)
    assert timezone.is_aware(created.appointment_date)
    assert created.appointment_date == timezone.make_aware(future)

    updated = _update(created, AppointmentStatus.CONFIRMED, when=future + timedelta(hours=1))
    assert timezone.is_aware(updated.appointment_date)

    past = (timezone.now() - timedelta(days=1)).replace(tzinfo=None)
    with pytest.raises(InvalidSchedule):
        svc.create_appointment(patient.id, doctor.id, past, 30)


def test_notes_keep_ampersands_and_angle_brackets_over_http(patient_client, patient, doctor, tomorrow_10):
    body = {
        'patient_id': str(patient.id),
        'doctor_id': str(doctor.id),
        'appointment_date': tomorrow_10.isoformat(),
        'duration_minutes': 30,
        'notes': '<b>pain</b> < 3 & stable',
    }
    r = patient_client.post(reverse('appointments'), body, format='json')
    assert r.status_code == 201
    assert r.data['notes'] == 'pain < 3 & stable'
    assert Appointment.objects.get(id=r.data['appointment_id']).notes == 'pain < 3 & stable'
