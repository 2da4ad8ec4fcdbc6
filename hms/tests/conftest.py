import itertools
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from hms.models import Department, Doctor, Patient, Role, User
from hms.services.tokens import get_token_service

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttle counters live in the cache
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(role=Role.PATIENT, username=None, password='P@ssw0rd1', **extra):
        username = username or f"{str(role).lower()}{next(_seq)}"
        extra.setdefault('email', f"{username}@example.com")
        extra.setdefault('first_name', 'Test')
        extra.setdefault('last_name', 'User')
        return User.objects.create_user(username=username, password=password, role=role, **extra)
    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(Role.ADMIN, is_staff=True)


@pytest.fixture
def department(db):
    return Department.objects.create(name='Cardiology', description='Heart and vessels')


@pytest.fixture
def doctor(make_user, department):
    return Doctor.objects.create(
        user=make_user(Role.DOCTOR),
        specialization='Cardiology',
        license_number='MD-0001',
        department=department,
        consultation_fee=Decimal('120.00'),
    )


@pytest.fixture
def patient(make_user):
    return Patient.objects.create(user=make_user(Role.PATIENT), date_of_birth=date(1990, 1, 2))


@pytest.fixture
def client_for():
    """Return an APIClient carrying a bearer token for ``user`` (or none)."""
    def _client(user=None):
        client = APIClient()
        if user is not None:
            token = get_token_service().issue(user.id, user.role)
            client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        return client
    return _client


@pytest.fixture
def admin_client(client_for, admin_user):
    return client_for(admin_user)


@pytest.fixture
def doctor_client(client_for, doctor):
    return client_for(doctor.user)


@pytest.fixture
def patient_client(client_for, patient):
    return client_for(patient.user)


@pytest.fixture
def tomorrow_10() -> datetime:
    return (timezone.now() + timedelta(days=1)).replace(hour=10, minute=0, second=0, microsecond=0)
