"""
Patient records.

Deleting a patient is only allowed once nothing is in flight for them:
no open appointment and no active admission.  Their closed history goes
with them in the same transaction, since the foreign keys themselves
are PROTECT.
"""
from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from clinic.exceptions import ConflictError
from clinic.models import Admission, Appointment, Patient

logger = logging.getLogger(__name__)

MRN_IN_USE = 'Medical Record Number (MRN) already in use'

# request key -> model field
FIELD_MAP = {
    'mrn': 'mrn',
    'firstName': 'first_name',
    'lastName': 'last_name',
    'dateOfBirth': 'date_of_birth',
    'gender': 'gender',
    'contactNumber': 'contact_number',
    'email': 'email',
    'address': 'address',
    'bloodGroup': 'blood_group',
    'allergies': 'allergies',
    'medicalHistory': 'medical_history',
}


def format_patient(patient: Patient) -> dict:
    return {
        'id': str(patient.id),
        'mrn': patient.mrn,
        'firstName': patient.first_name,
        'lastName': patient.last_name,
        'dateOfBirth': patient.date_of_birth.isoformat() if patient.date_of_birth else None,
        'gender': patient.gender,
        'contactNumber': patient.contact_number,
        'email': patient.email,
        'address': patient.address,
        'bloodGroup': patient.blood_group,
        'allergies': patient.allergies,
        'medicalHistory': patient.medical_history,
        'createdAt': patient.created_at.isoformat() if patient.created_at else None,
        'updatedAt': patient.updated_at.isoformat() if patient.updated_at else None,
    }


def list_patients():
    return Patient.objects.order_by('last_name', 'first_name')


def get_patient(patient_id) -> Patient:
    patient = Patient.objects.filter(pk=patient_id).first()
    if not patient:
        raise NotFound('Patient not found')
    return patient


def create_patient(data: dict) -> Patient:
    if Patient.objects.filter(mrn=data['mrn']).exists():
        raise ConflictError(MRN_IN_USE)
    fields = {FIELD_MAP[k]: v for k, v in data.items() if k in FIELD_MAP}
    try:
        with transaction.atomic():
            patient = Patient.objects.create(**fields)
    except IntegrityError as exc:
        # lost a race against another create with the same MRN
        raise ConflictError(MRN_IN_USE) from exc
    logger.info("Registered patient %s (mrn=%s)", patient.id, patient.mrn)
    return patient


def update_patient(patient_id, data: dict) -> Patient:
    patient = get_patient(patient_id)
    new_mrn = data.get('mrn')
    if new_mrn and new_mrn != patient.mrn and Patient.objects.filter(mrn=new_mrn).exists():
        raise ConflictError(MRN_IN_USE)
    for key, value in data.items():
        field = FIELD_MAP.get(key)
        if field == 'mrn' and not value:
            continue
        if field:
            setattr(patient, field, value)
    try:
        with transaction.atomic():
            patient.save()
    except IntegrityError as exc:
        raise ConflictError(MRN_IN_USE) from exc
    return patient


def has_active_dependents(patient: Patient) -> bool:
    open_appointments = Appointment.objects.filter(patient=patient, status__in=Appointment.OPEN_STATUSES)
    active_admissions = Admission.objects.filter(patient=patient, status=Admission.STATUS_ACTIVE)
    return open_appointments.exists() or active_admissions.exists()


def delete_patient(patient_id) -> None:
    get_patient(patient_id)
    with transaction.atomic():
        # Admissions and bookings lock the same row, so nothing slips in between
        patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
        if not patient:
            raise NotFound('Patient not found')
        if has_active_dependents(patient):
            raise ConflictError('Cannot delete patient with active appointments or admissions')
        Appointment.objects.filter(patient=patient).delete()
        Admission.objects.filter(patient=patient).delete()
        patient.delete()
    logger.info("Deleted patient %s", patient_id)
