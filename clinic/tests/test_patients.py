import uuid

import pytest

from clinic.models import Patient

pytestmark = pytest.mark.django_db


def test_create_patient_issues_id(api, patient_payload):
    r = api.post('/api/patients', patient_payload, format='json')
    assert r.status_code == 201
    assert r.data['id']
    assert r.data['mrn'] == 'MRN0001'
    assert r.data['dateOfBirth'] == '1985-05-15'
    assert Patient.objects.count() == 1


def test_duplicate_mrn_is_rejected(api, patient_payload):
    assert api.post('/api/patients', patient_payload, format='json').status_code == 201
    r = api.post('/api/patients', {**patient_payload, 'firstName': 'Jim'}, format='json')
    assert r.status_code == 400
    assert r.data == {'error': True, 'message': 'Medical Record Number (MRN) already in use'}
    assert Patient.objects.count() == 1


def test_missing_fields_are_itemised(api):
    r = api.post('/api/patients', {'firstName': 'John', 'gender': 'ROBOT'}, format='json')
    assert r.status_code == 400
    errors = {e['path']: e for e in r.data['errors']}
    assert errors['mrn']['msg'] == 'Medical Record Number (MRN) is required'
    assert errors['gender']['msg'] == 'Valid gender is required'
    assert errors['dateOfBirth']['location'] == 'body'
    assert 'firstName' not in errors
    assert Patient.objects.count() == 0


def test_free_text_is_stripped_of_markup(api, patient_payload):
    r = api.post('/api/patients', {**patient_payload, 'allergies': '<script>x</script>Penicillin'}, format='json')
    assert r.status_code == 201
    assert '<script>' not in r.data['allergies']


def test_invalid_path_id(api):
    r = api.get('/api/patients/not-a-uuid')
    assert r.status_code == 400
    assert r.data['errors'][0]['msg'] == 'Invalid patient ID'
    assert r.data['errors'][0]['location'] == 'params'


def test_unknown_patient_is_404(api):
    r = api.get(f'/api/patients/{uuid.uuid4()}')
    assert r.status_code == 404
    assert r.data == {'error': True, 'message': 'Patient not found'}


def test_get_is_idempotent(api, patient):
    first = api.get(f"/api/patients/{patient['id']}")
    second = api.get(f"/api/patients/{patient['id']}")
    assert first.status_code == second.status_code == 200
    assert first.data == second.data


def test_update_keeps_mrn_when_omitted(api, patient, patient_payload):
    body = {k: v for k, v in patient_payload.items() if k != 'mrn'}
    body['address'] = '1 New Rd'
    r = api.put(f"/api/patients/{patient['id']}", body, format='json')
    assert r.status_code == 200
    assert r.data['mrn'] == 'MRN0001'
    assert r.data['address'] == '1 New Rd'


def test_update_to_taken_mrn_is_rejected(api, patient, patient_payload):
    api.post('/api/patients', {**patient_payload, 'mrn': 'MRN0002'}, format='json')
    r = api.put(f"/api/patients/{patient['id']}", {**patient_payload, 'mrn': 'MRN0002'}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Medical Record Number (MRN) already in use'


def test_list_is_sorted_by_name(api, patient_payload):
    api.post('/api/patients', {**patient_payload, 'mrn': 'M1', 'lastName': 'Young'}, format='json')
    api.post('/api/patients', {**patient_payload, 'mrn': 'M2', 'lastName': 'Adams'}, format='json')
    r = api.get('/api/patients')
    assert [p['lastName'] for p in r.data] == ['Adams', 'Young']


def test_delete_patient_without_history(api, patient):
    r = api.delete(f"/api/patients/{patient['id']}")
    assert r.status_code == 200
    assert r.data == {'message': 'Patient deleted successfully'}
    assert not Patient.objects.exists()


def test_patient_history_endpoints(api, patient, bed, doctor):
    api.post('/api/appointments', {
        'patientId': patient['id'], 'doctorId': doctor.id, 'date': '2030-01-02',
        'time': '09:00', 'status': 'SCHEDULED', 'type': 'GENERAL',
    }, format='json')
    api.post('/api/admissions', {
        'patientId': patient['id'], 'bedId': bed['id'], 'doctorId': doctor.id, 'admissionDate': '2030-01-02',
    }, format='json')

    appts = api.get(f"/api/patients/{patient['id']}/appointments")
    adms = api.get(f"/api/patients/{patient['id']}/admissions")
    assert appts.status_code == adms.status_code == 200
    assert len(appts.data) == 1 and appts.data[0]['doctor']['id'] == doctor.id
    assert len(adms.data) == 1 and adms.data[0]['bed']['bedNumber'] == 'A-101'


def test_plain_text_symbols_are_kept(api, patient_payload):
    r = api.post('/api/patients', {**patient_payload, 'address': 'Flat 2, Smith & Sons Bldg'}, format='json')
    assert r.status_code == 201
    assert r.data['address'] == 'Flat 2, Smith & Sons Bldg'
    assert Patient.objects.get().address == 'Flat 2, Smith & Sons Bldg'
