"""
Admissions and the bed/admission pairing.

A bed is OCCUPIED by a patient exactly while that patient's admission to
it is ACTIVE, and a patient has at most one ACTIVE admission.  The three
operations that change either side (admit, discharge/transfer, delete)
each run as one transaction so both writes land together or not at all.

Concurrency:

* the bed is claimed with a conditional update (``status = AVAILABLE``),
  so of two admissions racing for one bed exactly one wins;
* the patient row is locked before the active-admission check, so two
  admissions of the same patient serialise;
* partial unique indexes (one ACTIVE admission per patient and per bed)
  back both rules on databases that support them;
* discharge and delete lock the admission row and re-read its status.
"""
from __future__ import annotations

import logging
from datetime import date as date_cls, datetime, time
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from clinic.exceptions import BedNotFound, BedUnavailable, ConflictError, DuplicateActiveAdmission, PatientNotFound
from clinic.models import Admission, Bed, Patient
from clinic.services.beds import claim_bed, format_bed, release_bed
from clinic.services.patients import format_patient
from clinic.services.users import format_user, resolve_doctor

logger = logging.getLogger(__name__)


def _as_datetime(value):
    """Dates from the API mean the start of that day in local time."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date_cls):
        return timezone.make_aware(datetime.combine(value, time.min))
    return value


def format_admission(admission: Admission, *, with_patient: bool = True) -> dict:
    data = {
        'id': str(admission.id),
        'patientId': str(admission.patient_id),
        'bedId': str(admission.bed_id),
        'doctorId': admission.doctor_id,
        'admissionDate': admission.admission_date.isoformat() if admission.admission_date else None,
        'dischargeDate': admission.discharge_date.isoformat() if admission.discharge_date else None,
        'status': admission.status,
        'diagnosis': admission.diagnosis,
        'notes': admission.notes,
        'createdAt': admission.created_at.isoformat() if admission.created_at else None,
        'updatedAt': admission.updated_at.isoformat() if admission.updated_at else None,
        'doctor': format_user(admission.doctor),
        'bed': format_bed(admission.bed, with_patient=False),
    }
    if with_patient:
        data['patient'] = format_patient(admission.patient)
    return data


def _base_queryset():
    return Admission.objects.select_related('patient', 'bed', 'doctor')


def list_admissions():
    return _base_queryset().order_by('-admission_date')


def list_active():
    return list_admissions().filter(status=Admission.STATUS_ACTIVE)


def list_for_patient(patient_id):
    return Admission.objects.select_related('bed', 'doctor').filter(patient_id=patient_id).order_by('-admission_date')


def get_admission(admission_id) -> Admission:
    admission = _base_queryset().filter(pk=admission_id).first()
    if not admission:
        raise NotFound('Admission not found')
    return admission


def has_active_admission(patient_id) -> bool:
    return Admission.objects.filter(patient_id=patient_id, status=Admission.STATUS_ACTIVE).exists()


def _lock_admission(admission_id) -> Admission:
    admission = Admission.objects.select_for_update().filter(pk=admission_id).first()
    if not admission:
        raise NotFound('Admission not found')
    return admission


def admit(
    *,
    patient_id,
    bed_id,
    doctor_id: str,
    admission_date,
    expected_discharge_date=None,
    diagnosis: Optional[str] = None,
    notes: Optional[str] = None,
) -> Admission:
    """Admit a patient to an available bed under a doctor."""
    if not Patient.objects.filter(pk=patient_id).exists():
        raise PatientNotFound()
    bed = Bed.objects.filter(pk=bed_id).first()
    if not bed:
        raise BedNotFound()
    if bed.status != Bed.STATUS_AVAILABLE:
        raise BedUnavailable()
    doctor = resolve_doctor(doctor_id)
    if has_active_admission(patient_id):
        raise DuplicateActiveAdmission()

    admitted_at = _as_datetime(admission_date)
    try:
        with transaction.atomic():
            patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
            if not patient:
                raise PatientNotFound()
            if has_active_admission(patient.pk):
                raise DuplicateActiveAdmission()
            if not claim_bed(
                bed.pk,
                patient=patient,
                admission_date=admitted_at,
                expected_discharge_date=_as_datetime(expected_discharge_date),
            ):
                raise BedUnavailable()
            admission = Admission.objects.create(
                patient=patient,
                bed_id=bed.pk,
                doctor=doctor,
                admission_date=admitted_at,
                diagnosis=diagnosis,
                notes=notes,
                status=Admission.STATUS_ACTIVE,
            )
    except IntegrityError as exc:
        # a concurrent admission got past the checks above
        logger.warning("Admission of patient %s to bed %s rejected by constraint: %s", patient_id, bed_id, exc)
        if has_active_admission(patient_id):
            raise DuplicateActiveAdmission() from exc
        raise BedUnavailable() from exc
    logger.info("Admitted patient %s to bed %s (admission %s)", patient_id, bed.bed_number, admission.id)
    return get_admission(admission.id)


def update_admission(admission_id, data: dict) -> Admission:
    """Edit an admission; closing an ACTIVE one frees its bed.

    ``status`` DISCHARGED or TRANSFERRED on an ACTIVE admission discharges
    it: the admission is closed (``dischargeDate`` defaults to now) and its
    bed is reset to AVAILABLE in the same transaction.  Anything else is a
    plain edit of diagnosis/notes with no effect on the bed.  Closed
    admissions cannot be reopened or moved to another closed status.
    """
    get_admission(admission_id)
    new_status = data.get('status')
    with transaction.atomic():
        admission = _lock_admission(admission_id)
        closing = bool(new_status) and new_status != Admission.STATUS_ACTIVE and admission.is_active
        if new_status and new_status != admission.status and not closing:
            raise ConflictError('Admission is already closed')
        if closing:
            admission.status = new_status
            admission.discharge_date = _as_datetime(data.get('dischargeDate')) or timezone.now()
        if data.get('diagnosis') is not None:
            admission.diagnosis = data['diagnosis']
        if data.get('notes') is not None:
            admission.notes = data['notes']
        admission.save()
        if closing:
            release_bed(admission.bed_id)
    if closing:
        logger.info("Admission %s closed as %s; bed %s released", admission_id, new_status, admission.bed_id)
    return get_admission(admission_id)


def discharge(admission_id, *, status: str = Admission.STATUS_DISCHARGED, discharge_date=None, notes=None) -> Admission:
    return update_admission(admission_id, {'status': status, 'dischargeDate': discharge_date, 'notes': notes})


def delete_admission(admission_id) -> None:
    """Remove an admission outright (administrative correction)."""
    get_admission(admission_id)
    with transaction.atomic():
        admission = _lock_admission(admission_id)
        was_active = admission.is_active
        bed_id = admission.bed_id
        admission.delete()
        if was_active:
            release_bed(bed_id)
    logger.info("Deleted admission %s%s", admission_id, " and released its bed" if was_active else "")
