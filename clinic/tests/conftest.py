from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.state import token_backend

from clinic.models import User


def bearer(sub, lifetime=timedelta(minutes=5)):
    """Sign a provider-style token (no token_type, no jti) for ``sub``."""
    now = timezone.now()
    token = token_backend.encode({'sub': sub, 'iat': int(now.timestamp()), 'exp': int((now + lifetime).timestamp())})
    return f'Bearer {token}'


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def doctor(db):
    return User.objects.create(
        id='user_doc_1', email='dr.smith@example.com', first_name='Emily', last_name='Smith', role=User.ROLE_DOCTOR,
    )


@pytest.fixture
def receptionist(db):
    return User.objects.create(
        id='user_front_1', email='front@example.com', first_name='Rita', last_name='Desk', role=User.ROLE_RECEPTIONIST,
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create(
        id='user_admin_1', email='admin@example.com', first_name='Ada', last_name='Admin', role=User.ROLE_ADMIN,
    )


@pytest.fixture
def api(receptionist):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=bearer(receptionist.id))
    return client


@pytest.fixture
def admin_api(admin_user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=bearer(admin_user.id))
    return client


@pytest.fixture
def patient_payload():
    return {
        'mrn': 'MRN0001',
        'firstName': 'John',
        'lastName': 'Doe',
        'dateOfBirth': '1985-05-15',
        'gender': 'MALE',
        'contactNumber': '+1234567890',
        'address': '123 Main St',
    }


@pytest.fixture
def patient(api, patient_payload):
    r = api.post('/api/patients', patient_payload, format='json')
    assert r.status_code == 201
    return r.data


@pytest.fixture
def bed(api):
    r = api.post('/api/beds', {'bedNumber': 'A-101', 'ward': 'GENERAL'}, format='json')
    assert r.status_code == 201
    return r.data


@pytest.fixture
def sign():
    return bearer
