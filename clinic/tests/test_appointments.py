import pytest
from django.utils import timezone

from clinic.models import Appointment, DailyQueue
from clinic.services.appointments import next_queue_number

pytestmark = pytest.mark.django_db


def book(api, patient, doctor, **overrides):
    body = {
        'patientId': patient['id'],
        'doctorId': doctor.id,
        'date': '2030-03-01',
        'time': '09:30',
        'status': 'SCHEDULED',
        'type': 'GENERAL',
    }
    body.update(overrides)
    return api.post('/api/appointments', body, format='json')


def test_queue_numbers_follow_creation_order(api, patient, doctor):
    first = book(api, patient, doctor)
    second = book(api, patient, doctor, time='10:00')
    assert first.status_code == second.status_code == 201
    assert first.data['queueNumber'] == 1
    assert second.data['queueNumber'] == 2


def test_queue_is_per_day(api, patient, doctor):
    book(api, patient, doctor)
    other_day = book(api, patient, doctor, date='2030-03-02')
    assert other_day.data['queueNumber'] == 1


def test_cancelled_booking_gets_no_number(api, patient, doctor):
    r = book(api, patient, doctor, status='CANCELLED')
    assert r.status_code == 201
    assert r.data['queueNumber'] is None
    assert book(api, patient, doctor).data['queueNumber'] == 1


def test_cancel_releases_number_and_uncancel_requeues(api, patient, doctor):
    first = book(api, patient, doctor).data
    book(api, patient, doctor, time='10:00')

    cancelled = api.put(f"/api/appointments/{first['id']}", {'status': 'CANCELLED'}, format='json')
    assert cancelled.status_code == 200
    assert cancelled.data['queueNumber'] is None

    back = api.put(f"/api/appointments/{first['id']}", {'status': 'SCHEDULED'}, format='json')
    assert back.data['queueNumber'] == 3


def test_unknown_doctor_is_rejected(api, patient, receptionist):
    r = book(api, patient, receptionist)
    assert r.status_code == 400
    assert r.data == {'error': True, 'message': 'Valid doctor not found'}
    assert not Appointment.objects.exists()


def test_time_is_validated_and_normalised(api, patient, doctor):
    bad = book(api, patient, doctor, time='25:00')
    assert bad.status_code == 400
    assert bad.data['errors'][0]['path'] == 'time'
    ok = book(api, patient, doctor, time='9:05')
    assert ok.data['time'] == '09:05'


def test_today_lists_only_today(api, patient, doctor):
    today = timezone.localdate().isoformat()
    book(api, patient, doctor, date=today, time='11:00')
    book(api, patient, doctor, date=today, time='08:00', status='IN_QUEUE')
    book(api, patient, doctor, date='2031-01-01')
    r = api.get('/api/appointments/today')
    assert r.status_code == 200
    assert [a['time'] for a in r.data] == ['11:00', '08:00']


def test_detail_embeds_patient_and_doctor(api, patient, doctor):
    appt = book(api, patient, doctor, notes='bring x-rays').data
    r = api.get(f"/api/appointments/{appt['id']}")
    assert r.data['patient']['mrn'] == 'MRN0001'
    assert r.data['doctor']['firstName'] == 'Emily'
    assert r.data['notes'] == 'bring x-rays'


def test_delete_appointment(api, patient, doctor):
    appt = book(api, patient, doctor).data
    r = api.delete(f"/api/appointments/{appt['id']}")
    assert r.data == {'message': 'Appointment deleted successfully'}
    assert api.get(f"/api/appointments/{appt['id']}").status_code == 404


def test_next_queue_number_skips_cancelled(patient, doctor):
    day = timezone.localdate()
    Appointment.objects.create(
        patient_id=patient['id'], doctor=doctor, date=day, time='09:00',
        status=Appointment.STATUS_CANCELLED, type='GENERAL', queue_number=None,
    )
    assert next_queue_number(day) == 1


def test_daily_queue_row_is_shared_per_day(api, patient, doctor):
    book(api, patient, doctor)
    book(api, patient, doctor, time='10:00')
    assert DailyQueue.objects.filter(date='2030-03-01').count() == 1
    assert next_queue_number(DailyQueue.objects.get().date) == 3
