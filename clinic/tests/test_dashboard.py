import pytest
from django.utils import timezone

from clinic.services.dashboard import occupancy_rate

pytestmark = pytest.mark.django_db


def test_summary_on_empty_store(api):
    r = api.get('/api/dashboard/summary')
    assert r.status_code == 200
    for key in ('totalPatients', 'totalAppointments', 'appointmentsToday', 'availableBeds',
                'occupiedBeds', 'maintenanceBeds', 'totalBeds', 'lowStockItems', 'activeAdmissions'):
        assert r.data[key] == 0, key
    assert r.data['occupancyRate'] == 0
    assert r.data['recentAdmissions'] == []
    assert r.data['upcomingAppointments'] == []


def test_occupancy_rate_rounds():
    assert occupancy_rate(0, 0) == 0
    assert occupancy_rate(1, 3) == 33
    assert occupancy_rate(2, 3) == 67
    assert occupancy_rate(1, 8) == 13


def test_summary_counts(api, patient, bed, doctor):
    today = timezone.localdate().isoformat()
    api.post('/api/beds', {'bedNumber': 'A-102', 'ward': 'GENERAL'}, format='json')
    api.post('/api/appointments', {
        'patientId': patient['id'], 'doctorId': doctor.id, 'date': today,
        'time': '09:00', 'status': 'SCHEDULED', 'type': 'GENERAL',
    }, format='json')
    api.post('/api/admissions', {
        'patientId': patient['id'], 'bedId': bed['id'], 'doctorId': doctor.id, 'admissionDate': today,
    }, format='json')

    data = api.get('/api/dashboard/summary').data
    assert data['totalPatients'] == 1
    assert data['appointmentsToday'] == 1
    assert data['totalBeds'] == 2
    assert data['occupiedBeds'] == 1
    assert data['occupancyRate'] == 50
    assert data['activeAdmissions'] == 1
    assert len(data['recentAdmissions']) == 1
    assert data['upcomingAppointments'][0]['time'] == '09:00'


def test_bed_stats_by_ward(api):
    api.post('/api/beds', {'bedNumber': 'A-1', 'ward': 'GENERAL'}, format='json')
    api.post('/api/beds', {'bedNumber': 'A-2', 'ward': 'GENERAL', 'status': 'MAINTENANCE'}, format='json')
    api.post('/api/beds', {'bedNumber': 'I-1', 'ward': 'ICU'}, format='json')
    r = api.get('/api/dashboard/beds/stats')
    assert r.status_code == 200
    assert r.data['GENERAL'] == {'total': 2, 'available': 1, 'occupied': 0, 'maintenance': 1}
    assert r.data['ICU'] == {'total': 1, 'available': 1, 'occupied': 0, 'maintenance': 0}


def test_appointment_stats(api, patient, doctor):
    today = timezone.localdate().isoformat()
    for kind in ('GENERAL', 'GENERAL', 'EMERGENCY'):
        api.post('/api/appointments', {
            'patientId': patient['id'], 'doctorId': doctor.id, 'date': today,
            'time': '09:00', 'status': 'SCHEDULED', 'type': kind,
        }, format='json')
    r = api.get('/api/dashboard/appointments/stats')
    assert r.data['daily'] == [{'day': today, 'count': 3}]
    assert {'type': 'GENERAL', 'count': 2} in r.data['byType']
    assert r.data['byStatus'] == [{'status': 'SCHEDULED', 'count': 3}]
