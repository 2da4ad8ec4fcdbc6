import uuid
from unittest import mock

import pytest
from django.db.models import QuerySet
from django.urls import reverse

from hms.exceptions import Conflict, InvalidInput, InvalidState, NotEditable, NotFound
from hms.models import Appointment, AppointmentStatus, Consultation, Patient, Role
from hms.services import consultations as svc

pytestmark = pytest.mark.django_db


@pytest.fixture
def completed(patient, doctor, tomorrow_10):
    return Appointment.objects.create(
        patient=patient, doctor=doctor, appointment_date=tomorrow_10, duration_minutes=30,
        status=AppointmentStatus.COMPLETED,
    )


def _create(appt, **overrides):
    kwargs = dict(appointment_id=appt.id, patient_id=appt.patient_id, doctor_id=appt.doctor_id,
                  diagnosis='flu', notes='rest and fluids')
    kwargs.update(overrides)
    return svc.create_consultation(**kwargs)


def test_create_for_completed_appointment(completed):
    c = _create(completed)
    assert c.is_editable is True
    assert c.patient_id == completed.patient_id and c.doctor_id == completed.doctor_id
    assert svc.get_consultation_for_appointment(completed.id).id == c.id


@pytest.mark.parametrize('status', ['PENDING', 'CONFIRMED', 'CANCELLED'])
def test_create_requires_completed_appointment(completed, status):
    Appointment.objects.filter(id=completed.id).update(status=status)
    with pytest.raises(InvalidState):
        _create(completed)


def test_create_for_missing_appointment_is_not_found():
    with pytest.raises(NotFound):
        svc.create_consultation(uuid.uuid4(), uuid.uuid4(), uuid.uuid4(), 'flu')


def test_second_consultation_conflicts(completed):
    _create(completed)
    with pytest.raises(Conflict):
        _create(completed, diagnosis='cold')
    assert Consultation.objects.count() == 1


def test_conflict_is_checked_before_mismatch(completed):
    _create(completed)
    with pytest.raises(Conflict):
        _create(completed, patient_id=uuid.uuid4())


def test_mismatched_patient_or_doctor_is_invalid(completed, make_user):
    other = Patient.objects.create(user=make_user(Role.PATIENT), date_of_birth='1980-05-05')
    with pytest.raises(InvalidInput):
        _create(completed, patient_id=other.id)
    with pytest.raises(InvalidInput):
        _create(completed, doctor_id=uuid.uuid4())


def test_blank_diagnosis_is_invalid(completed):
    with pytest.raises(InvalidInput):
        _create(completed, diagnosis='   ')


def test_lost_race_on_insert_is_reported_as_conflict(completed):
    _create(completed)
    # both creators passed the existence lookup; the unique constraint decides
    with mock.patch.object(QuerySet, 'exists', return_value=False):
        with pytest.raises(Conflict):
            _create(completed, diagnosis='cold')
    assert Consultation.objects.count() == 1


def test_update_changes_clinical_content_only(completed):
    c = _create(completed)
    updated = svc.update_consultation(c.id, 'influenza A', 'oseltamivir')
    assert (updated.diagnosis, updated.notes) == ('influenza A', 'oseltamivir')
    assert updated.is_editable is True
    assert updated.appointment_id == completed.id


def test_update_rejected_when_locked(completed):
    c = _create(completed)
    Consultation.objects.filter(id=c.id).update(is_editable=False)
    with pytest.raises(NotEditable):
        svc.update_consultation(c.id, 'changed', '')
    assert Consultation.objects.get(id=c.id).diagnosis == 'flu'


def test_update_missing_is_not_found():
    with pytest.raises(NotFound):
        svc.update_consultation(uuid.uuid4(), 'x', '')


def test_markup_is_stripped_from_free_text(completed):
    c = _create(completed, diagnosis='<b>flu</b>', notes='<script>alert(1)</script>rest')
    assert c.diagnosis == 'flu'
    assert '<script>' not in c.notes


# ---------------------------------------------------------------------------
# HTTP scenarios
# ---------------------------------------------------------------------------

def test_complete_then_write_consultation_then_duplicate(doctor_client, patient, doctor, tomorrow_10):
    r = doctor_client.post(reverse('appointments'), {
        'patient_id': str(patient.id), 'doctor_id': str(doctor.id),
        'appointment_date': tomorrow_10.isoformat(), 'duration_minutes': 30,
    }, format='json')
    assert r.status_code == 201
    appt_id = r.data['appointment_id']

    r = doctor_client.put(reverse('appointment-detail', args=[appt_id]), {
        'appointment_date': tomorrow_10.isoformat(), 'duration_minutes': 30, 'status': 'COMPLETED',
    }, format='json')
    assert r.status_code == 200 and r.data['status'] == 'COMPLETED'

    body = {'appointment_id': appt_id, 'patient_id': str(patient.id), 'doctor_id': str(doctor.id),
            'diagnosis': 'flu'}
    r = doctor_client.post(reverse('consultations'), body, format='json')
    assert r.status_code == 201
    assert r.data['is_editable'] is True
    assert r.data['diagnosis'] == 'flu'

    r = doctor_client.post(reverse('consultations'), body, format='json')
    assert r.status_code == 409
    assert r.data == {'error': 'consultation already exists for this appointment'}


def test_consultation_reads(patient_client, completed, patient):
    c = _create(completed)
    r = patient_client.get(reverse('consultation-detail', args=[c.id]))
    assert r.status_code == 200 and r.data['consultation_id'] == str(c.id)

    r = patient_client.get(reverse('consultation-for-appointment', args=[completed.id]))
    assert r.status_code == 200 and r.data['appointment_id'] == str(completed.id)

    r = patient_client.get(reverse('consultations'), {'patient_id': str(patient.id)})
    assert [x['consultation_id'] for x in r.data] == [str(c.id)]

    r = patient_client.get(reverse('consultations'), {'patient_id': str(uuid.uuid4())})
    assert r.status_code == 200 and r.data == []

    r = patient_client.get(reverse('consultation-for-appointment', args=[uuid.uuid4()]))
    assert r.status_code == 404


def test_locked_consultation_put_is_400(doctor_client, completed):
    c = _create(completed)
    Consultation.objects.filter(id=c.id).update(is_editable=False)
    r = doctor_client.put(reverse('consultation-detail', args=[c.id]), {'diagnosis': 'cold'}, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'consultation is not editable'}


def test_patient_cannot_edit_consultation(patient_client, completed):
    c = _create(completed)
    r = patient_client.put(reverse('consultation-detail', args=[c.id]), {'diagnosis': 'cold'}, format='json')
    assert r.status_code == 403


def test_clinical_text_is_stored_as_typed(completed):
    c = _create(completed, diagnosis='flu & bronchitis', notes='BP < 120 & HR > 60')
    stored = Consultation.objects.get(id=c.id)
    assert stored.diagnosis == 'flu & bronchitis'
    assert stored.notes == 'BP < 120 & HR > 60'

    updated = svc.update_consultation(c.id, 'A&E referral', '<p>temp > 39</p>')
    assert (updated.diagnosis, updated.notes) == ('A&E referral', 'temp > 39')
