"""
Beds and their occupancy.

A bed only becomes OCCUPIED through an admission and only becomes free
again through a discharge, transfer or admission delete; see
``clinic.services.admissions``.  ``claim_bed`` and ``release_bed`` are the
two primitives those operations use.  Plain bed edits may move a free bed
between AVAILABLE and MAINTENANCE and change its ward or notes.
"""
from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from clinic.exceptions import ConflictError
from clinic.models import Admission, Bed
from clinic.services.patients import format_patient

logger = logging.getLogger(__name__)

BED_NUMBER_TAKEN = 'Bed number already exists'


def format_bed(bed: Bed, *, with_patient: bool = True) -> dict:
    data = {
        'id': str(bed.id),
        'bedNumber': bed.bed_number,
        'ward': bed.ward,
        'status': bed.status,
        'patientId': str(bed.patient_id) if bed.patient_id else None,
        'admissionDate': bed.admission_date.isoformat() if bed.admission_date else None,
        'expectedDischargeDate': bed.expected_discharge_date.isoformat() if bed.expected_discharge_date else None,
        'notes': bed.notes,
        'createdAt': bed.created_at.isoformat() if bed.created_at else None,
        'updatedAt': bed.updated_at.isoformat() if bed.updated_at else None,
    }
    if with_patient:
        data['patient'] = format_patient(bed.patient) if bed.patient else None
    return data


def list_beds():
    return Bed.objects.select_related('patient').order_by('bed_number')


def list_by_ward(ward: str):
    return list_beds().filter(ward=ward)


def list_available():
    return Bed.objects.filter(status=Bed.STATUS_AVAILABLE).order_by('bed_number')


def get_bed(bed_id) -> Bed:
    bed = Bed.objects.select_related('patient').filter(pk=bed_id).first()
    if not bed:
        raise NotFound('Bed not found')
    return bed


def create_bed(*, bed_number: str, ward: str, status: str = Bed.STATUS_AVAILABLE, notes=None) -> Bed:
    if status == Bed.STATUS_OCCUPIED:
        raise ConflictError('A new bed cannot be occupied; admit a patient to it instead')
    if Bed.objects.filter(bed_number=bed_number).exists():
        raise ConflictError(BED_NUMBER_TAKEN)
    try:
        with transaction.atomic():
            bed = Bed.objects.create(bed_number=bed_number, ward=ward, status=status, notes=notes)
    except IntegrityError as exc:
        raise ConflictError(BED_NUMBER_TAKEN) from exc
    logger.info("Created bed %s in %s", bed.bed_number, bed.ward)
    return bed


def update_bed(bed_id, data: dict) -> Bed:
    get_bed(bed_id)
    with transaction.atomic():
        bed = Bed.objects.select_for_update().filter(pk=bed_id).first()
        if not bed:
            raise NotFound('Bed not found')
        new_status = data.get('status')
        if new_status and new_status != bed.status:
            if new_status == Bed.STATUS_OCCUPIED:
                raise ConflictError('Beds are occupied by admitting a patient')
            if bed.status == Bed.STATUS_OCCUPIED:
                raise ConflictError('Bed is occupied; discharge the patient first')
            bed.status = new_status
            bed.patient = None
            bed.admission_date = None
            bed.expected_discharge_date = None
        if data.get('ward'):
            bed.ward = data['ward']
        if 'notes' in data:
            bed.notes = data['notes']
        bed.save()
    return get_bed(bed_id)


def delete_bed(bed_id) -> None:
    get_bed(bed_id)
    with transaction.atomic():
        bed = Bed.objects.select_for_update().filter(pk=bed_id).first()
        if not bed:
            raise NotFound('Bed not found')
        if bed.status == Bed.STATUS_OCCUPIED:
            raise ConflictError('Cannot delete an occupied bed')
        if Admission.objects.filter(bed=bed, status=Admission.STATUS_ACTIVE).exists():
            raise ConflictError('Cannot delete a bed with active admissions')
        if Admission.objects.filter(bed=bed).exists():
            raise ConflictError('Cannot delete a bed with admission history')
        bed.delete()
    logger.info("Deleted bed %s", bed_id)


def claim_bed(bed_id, *, patient, admission_date, expected_discharge_date=None) -> bool:
    """Mark a bed OCCUPIED by ``patient`` if, and only if, it is AVAILABLE.

    A single conditional UPDATE; returns False when the bed was taken (or
    put into maintenance) by someone else first.
    """
    claimed = Bed.objects.filter(pk=bed_id, status=Bed.STATUS_AVAILABLE).update(
        status=Bed.STATUS_OCCUPIED,
        patient=patient,
        admission_date=admission_date,
        expected_discharge_date=expected_discharge_date,
    )
    return claimed == 1


def release_bed(bed_id) -> None:
    Bed.objects.filter(pk=bed_id).update(
        status=Bed.STATUS_AVAILABLE,
        patient=None,
        admission_date=None,
        expected_discharge_date=None,
    )
