"""
Appointments and the per-day queue.

Every non-cancelled appointment on a calendar day carries a queue number:
the highest number already handed out for that day plus one, starting at
1.  Cancelled appointments carry none.  The day's ``DailyQueue`` row is
locked while a number is computed so two bookings for the same day can
never read the same maximum.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Case, IntegerField, Max, Value, When
from django.utils import timezone
from rest_framework.exceptions import NotFound

from clinic.exceptions import ConflictError, PatientNotFound
from clinic.models import Appointment, DailyQueue, Patient
from clinic.services.patients import format_patient
from clinic.services.users import format_user, resolve_doctor

logger = logging.getLogger(__name__)

# Workflow order, used when listing the day's appointments
STATUS_ORDER = Case(
    *[When(status=s, then=Value(i)) for i, (s, _) in enumerate(Appointment.STATUS_CHOICES)],
    output_field=IntegerField(),
)


def format_appointment(appt: Appointment, *, with_patient: bool = True, with_doctor: bool = True) -> dict:
    data = {
        'id': str(appt.id),
        'patientId': str(appt.patient_id),
        'doctorId': appt.doctor_id,
        'date': appt.date.isoformat() if appt.date else None,
        'time': appt.time,
        'status': appt.status,
        'type': appt.type,
        'notes': appt.notes,
        'queueNumber': appt.queue_number,
        'createdAt': appt.created_at.isoformat() if appt.created_at else None,
        'updatedAt': appt.updated_at.isoformat() if appt.updated_at else None,
    }
    if with_patient:
        data['patient'] = format_patient(appt.patient)
    if with_doctor:
        data['doctor'] = format_user(appt.doctor)
    return data


def _base_queryset():
    return Appointment.objects.select_related('patient', 'doctor')


def list_appointments():
    return _base_queryset().order_by('date', 'time')


def list_today():
    today = timezone.localdate()
    return _base_queryset().filter(date=today).order_by(STATUS_ORDER, 'time')


def list_for_patient(patient_id):
    return Appointment.objects.select_related('doctor').filter(patient_id=patient_id).order_by('-date', '-time')


def get_appointment(appointment_id) -> Appointment:
    appt = _base_queryset().filter(pk=appointment_id).first()
    if not appt:
        raise NotFound('Appointment not found')
    return appt


def next_queue_number(day) -> int:
    """Return the next queue number for ``day``.  Call inside a transaction."""
    DailyQueue.objects.get_or_create(date=day)
    DailyQueue.objects.select_for_update().get(date=day)  # held until the booking commits
    highest = (
        Appointment.objects.filter(date=day, queue_number__isnull=False)
        .exclude(status=Appointment.STATUS_CANCELLED)
        .aggregate(highest=Max('queue_number'))['highest']
    ) or 0
    return highest + 1


def create_appointment(
    *, patient_id, doctor_id: str, date, time: str, status: str, type: str, notes: Optional[str] = None
) -> Appointment:
    if not Patient.objects.filter(pk=patient_id).exists():
        raise PatientNotFound()
    doctor = resolve_doctor(doctor_id)
    try:
        with transaction.atomic():
            patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
            if not patient:
                raise PatientNotFound()
            queue_number = None
            if status != Appointment.STATUS_CANCELLED:
                queue_number = next_queue_number(date)
            appt = Appointment.objects.create(
                patient=patient, doctor=doctor, date=date, time=time,
                status=status, type=type, notes=notes, queue_number=queue_number,
            )
    except IntegrityError as exc:
        raise ConflictError('Queue number already taken for this date') from exc
    logger.info("Booked appointment %s on %s #%s", appt.id, appt.date, appt.queue_number)
    return get_appointment(appt.id)


def update_appointment(appointment_id, data: dict) -> Appointment:
    """Update status and/or notes.

    Cancelling releases the queue number; moving a cancelled appointment
    back into the workflow queues it again at the end of its day.
    """
    get_appointment(appointment_id)
    try:
        with transaction.atomic():
            appt = Appointment.objects.select_for_update().filter(pk=appointment_id).first()
            if not appt:
                raise NotFound('Appointment not found')
            new_status = data.get('status')
            if new_status and new_status != appt.status:
                if new_status == Appointment.STATUS_CANCELLED:
                    appt.queue_number = None
                elif appt.status == Appointment.STATUS_CANCELLED:
                    appt.queue_number = next_queue_number(appt.date)
                appt.status = new_status
            if 'notes' in data:
                appt.notes = data['notes']
            appt.save()
    except IntegrityError as exc:
        raise ConflictError('Queue number already taken for this date') from exc
    return get_appointment(appointment_id)


def delete_appointment(appointment_id) -> None:
    appt = get_appointment(appointment_id)
    appt.delete()
    logger.info("Deleted appointment %s", appointment_id)
