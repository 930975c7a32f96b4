"""
Database models for the MediConnect backend.

These models capture the hospital's bookkeeping: staff users (whose
identities live with the hosted identity provider), patients, their
appointments, the beds of each ward, admissions that occupy those beds,
and the inventory of medicines, equipment and supplies.  Field names are
snake_case here and exposed as camelCase by the service formatters.
"""
from __future__ import annotations

import uuid

from django.db import models
from django.db.models import Q


class User(models.Model):
    """A member of staff known to the identity provider.

    The primary key is the provider's subject id (e.g. ``user_2NNK...``)
    so that an authenticated request maps straight onto a row here.
    Users are never deleted by the API.
    """
    ROLE_ADMIN = 'ADMIN'
    ROLE_DOCTOR = 'DOCTOR'
    ROLE_RECEPTIONIST = 'RECEPTIONIST'
    ROLE_INVENTORY_MANAGER = 'INVENTORY_MANAGER'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_RECEPTIONIST, 'Receptionist'),
        (ROLE_INVENTORY_MANAGER, 'Inventory manager'),
    ]

    id = models.CharField(max_length=191, primary_key=True)
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.role})"

    @property
    def is_doctor(self) -> bool:
        return self.role == self.ROLE_DOCTOR


class Patient(models.Model):
    GENDER_CHOICES = [
        ('MALE', 'Male'),
        ('FEMALE', 'Female'),
        ('OTHER', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mrn = models.CharField(max_length=64, unique=True, help_text="Medical Record Number")
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, db_index=True)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    contact_number = models.CharField(max_length=32)
    email = models.EmailField(blank=True, null=True)
    address = models.TextField()
    blood_group = models.CharField(max_length=8, blank=True, null=True)
    allergies = models.TextField(blank=True, null=True)
    medical_history = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.mrn})"


class DailyQueue(models.Model):
    """One row per calendar day.

    The row is locked with ``SELECT ... FOR UPDATE`` while a queue number
    is being handed out for that day so concurrent bookings serialise.
    """
    date = models.DateField(primary_key=True)

    def __str__(self) -> str:
        return f"Queue {self.date:%Y-%m-%d}"


class Appointment(models.Model):
    STATUS_SCHEDULED = 'SCHEDULED'
    STATUS_IN_QUEUE = 'IN_QUEUE'
    STATUS_IN_PROGRESS = 'IN_PROGRESS'
    STATUS_COMPLETED = 'COMPLETED'
    STATUS_CANCELLED = 'CANCELLED'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_IN_QUEUE, 'In queue'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    # Statuses that keep a patient from being deleted
    OPEN_STATUSES = (STATUS_SCHEDULED, STATUS_IN_QUEUE, STATUS_IN_PROGRESS)

    TYPE_CHOICES = [
        ('GENERAL', 'General'),
        ('FOLLOW_UP', 'Follow up'),
        ('SPECIALIST', 'Specialist'),
        ('EMERGENCY', 'Emergency'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    doctor = models.ForeignKey(User, on_delete=models.PROTECT, related_name='appointments')
    date = models.DateField(db_index=True)
    time = models.CharField(max_length=5, help_text="HH:MM")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, db_index=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    notes = models.TextField(blank=True, null=True)
    queue_number = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['date', 'queue_number'],
                condition=Q(queue_number__isnull=False),
                name='appointment_unique_queue_number_per_day',
            ),
        ]
        indexes = [
            models.Index(fields=['date', 'time']),
        ]

    def __str__(self) -> str:
        return f"{self.date:%Y-%m-%d} {self.time} #{self.queue_number or '-'} ({self.status})"


class Bed(models.Model):
    STATUS_AVAILABLE = 'AVAILABLE'
    STATUS_OCCUPIED = 'OCCUPIED'
    STATUS_MAINTENANCE = 'MAINTENANCE'
    STATUS_CHOICES = [
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_OCCUPIED, 'Occupied'),
        (STATUS_MAINTENANCE, 'Maintenance'),
    ]

    WARD_CHOICES = [
        ('GENERAL', 'General'),
        ('ICU', 'ICU'),
        ('EMERGENCY', 'Emergency'),
        ('PEDIATRIC', 'Pediatric'),
        ('MATERNITY', 'Maternity'),
        ('PSYCHIATRIC', 'Psychiatric'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bed_number = models.CharField(max_length=32, unique=True)
    ward = models.CharField(max_length=20, choices=WARD_CHOICES, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)
    # Back-reference to the occupant; the admission owns the relationship
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='beds'
    )
    admission_date = models.DateTimeField(null=True, blank=True)
    expected_discharge_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Bed {self.bed_number} ({self.ward}, {self.status})"


class Admission(models.Model):
    STATUS_ACTIVE = 'ACTIVE'
    STATUS_DISCHARGED = 'DISCHARGED'
    STATUS_TRANSFERRED = 'TRANSFERRED'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_DISCHARGED, 'Discharged'),
        (STATUS_TRANSFERRED, 'Transferred'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='admissions')
    bed = models.ForeignKey(Bed, on_delete=models.PROTECT, related_name='admissions')
    doctor = models.ForeignKey(User, on_delete=models.PROTECT, related_name='admissions')
    admission_date = models.DateTimeField(db_index=True)
    discharge_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    diagnosis = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['patient'],
                condition=Q(status='ACTIVE'),
                name='admission_one_active_per_patient',
            ),
            models.UniqueConstraint(
                fields=['bed'],
                condition=Q(status='ACTIVE'),
                name='admission_one_active_per_bed',
            ),
        ]

    def __str__(self) -> str:
        return f"Admission {self.id} ({self.status})"

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE


class InventoryItem(models.Model):
    CATEGORY_CHOICES = [
        ('MEDICINE', 'Medicine'),
        ('EQUIPMENT', 'Equipment'),
        ('SUPPLIES', 'Supplies'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)
    description = models.TextField(blank=True, null=True)
    unit = models.CharField(max_length=32)
    quantity = models.PositiveIntegerField(default=0)
    reorder_level = models.PositiveIntegerField(default=1)
    cost = models.DecimalField(max_digits=12, decimal_places=2)
    supplier = models.CharField(max_length=255, blank=True, null=True)
    expiry_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=Q(reorder_level__gte=1), name='inventory_reorder_level_positive'),
            models.CheckConstraint(condition=Q(cost__gte=0), name='inventory_cost_non_negative'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} {self.unit})"

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level
