"""
Shared pytest fixtures: users for every role, an approved doctor with a
Monday 09:00-11:00 template, and API clients carrying real JWT tokens.
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from doctors.models import AvailabilitySlot, Doctor
from user.models import Role, User
from user.services import create_user
from user.tokens import issue_tokens


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client():
    """Return a factory building an APIClient authenticated as the given user."""

    def _make(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['token']}")
        return client

    return _make


@pytest.fixture
def patient(db):
    return create_user(name='Alice Patient', email='alice@example.com', password='secret123')


@pytest.fixture
def other_patient(db):
    return create_user(name='Bob Patient', email='bob@example.com', password='secret123')


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(email='admin@docspot.com', password='admin123', name='Admin')


@pytest.fixture
def doctor(db):
    """Approved doctor profile available on Mondays from 09:00 to 11:00."""
    user = create_user(
        name='Dr. Carol',
        email='carol@example.com',
        password='secret123',
        role=Role.DOCTOR,
        doctor_profile={'specialization': 'Cardiology', 'hospital_name': 'City Hospital'},
    )
    profile = user.doctor_profile
    profile.is_approved = True
    profile.approved_at = timezone.now()
    profile.save()
    AvailabilitySlot.objects.create(doctor=profile, day='Monday', start_time='09:00', end_time='11:00')
    return profile


@pytest.fixture
def other_doctor(db):
    user = create_user(name='Dr. Dave', email='dave@example.com', password='secret123', role=Role.DOCTOR)
    profile = user.doctor_profile
    profile.is_approved = True
    profile.save()
    AvailabilitySlot.objects.create(doctor=profile, day='Monday', start_time='09:00', end_time='11:00')
    return profile


@pytest.fixture
def pending_doctor(db):
    user = create_user(name='Dr. Eve', email='eve@example.com', password='secret123', role=Role.DOCTOR)
    profile = Doctor.objects.get(user=user)
    AvailabilitySlot.objects.create(doctor=profile, day='Monday', start_time='09:00', end_time='11:00')
    return profile


@pytest.fixture
def next_monday():
    """The first Monday strictly after today."""
    today = timezone.localdate()
    return today + timedelta(days=7 - today.weekday())


@pytest.fixture
def next_tuesday(next_monday):
    return next_monday + timedelta(days=1)
