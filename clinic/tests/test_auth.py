from datetime import timedelta

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.models import TokenUser


pytestmark = pytest.mark.django_db


def test_public_routes_need_no_token():
    client = APIClient()
    assert client.get('/').data == {'message': 'Welcome to MediConnect API'}
    r = client.get('/health')
    assert r.status_code == 200
    assert r.data['status'] == 'ok' and r.data['db'] is True


def test_api_requires_bearer_token():
    r = APIClient().get('/api/patients')
    assert r.status_code == 401
    assert r.data['error'] is True
    assert r['WWW-Authenticate'].startswith('Bearer')


def test_garbage_and_expired_tokens_are_refused(receptionist, sign):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not.a.jwt')
    assert client.get('/api/patients').status_code == 401
    client.credentials(HTTP_AUTHORIZATION=sign(receptionist.id, lifetime=timedelta(minutes=-10)))
    assert client.get('/api/patients').status_code == 401


def test_valid_token_is_accepted(api):
    r = api.get('/api/patients')
    assert r.status_code == 200
    assert r.data == []


def test_me_returns_staff_record(api, receptionist):
    r = api.get('/api/users/me')
    assert r.status_code == 200
    assert r.data['id'] == receptionist.id
    assert r.data['role'] == 'RECEPTIONIST'


def test_me_for_unregistered_subject(sign):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=sign("user_nobody"))
    r = client.get('/api/users/me')
    assert r.status_code == 404
    assert r.data == {'error': True, 'message': 'User not found'}


def test_doctors_list_exposes_public_fields_only(api, doctor):
    r = api.get('/api/users/doctors')
    assert r.status_code == 200
    assert r.data == [{'id': doctor.id, 'firstName': 'Emily', 'lastName': 'Smith', 'email': 'dr.smith@example.com'}]


def test_force_authenticated_token_user(doctor):
    client = APIClient()
    client.force_authenticate(user=TokenUser({'sub': doctor.id}))
    r = client.get('/api/users/me')
    assert r.status_code == 200
    assert r.data['role'] == 'DOCTOR'
