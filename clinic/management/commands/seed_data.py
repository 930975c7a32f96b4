"""
Management command to populate the database with demo data.

Safe to run repeatedly: existing staff, patients, beds and inventory are
brought up to date instead of duplicated, and appointments/admissions go
through the services so queue numbers and bed occupancy stay consistent.
"""
from datetime import date, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import Admission, Appointment, Bed, InventoryItem, Patient, User
from clinic.services import admissions as admission_service
from clinic.services import appointments as appointment_service
from clinic.services import users as user_service

STAFF = [
    {'id': 'user_2NNKm4a9XlUlcF1234567', 'email': 'dr.smith@mediconnect.com',
     'first_name': 'Emily', 'last_name': 'Smith', 'role': User.ROLE_DOCTOR},
    {'id': 'user_2NNKm4a9XlUlcF7654321', 'email': 'dr.johnson@mediconnect.com',
     'first_name': 'Robert', 'last_name': 'Johnson', 'role': User.ROLE_DOCTOR},
    {'id': 'user_admin123456789', 'email': 'admin@mediconnect.com',
     'first_name': 'Admin', 'last_name': 'User', 'role': User.ROLE_ADMIN},
    {'id': 'user_receptionist123456789', 'email': 'reception@mediconnect.com',
     'first_name': 'Reception', 'last_name': 'Staff', 'role': User.ROLE_RECEPTIONIST},
]

PATIENTS = [
    {'mrn': 'MRN0001', 'first_name': 'John', 'last_name': 'Doe', 'date_of_birth': date(1985, 5, 15),
     'gender': 'MALE', 'contact_number': '+1234567890', 'address': '123 Main St, Springfield',
     'blood_group': 'A+', 'allergies': 'Penicillin'},
    {'mrn': 'MRN0002', 'first_name': 'Jane', 'last_name': 'Smith', 'date_of_birth': date(1990, 8, 20),
     'gender': 'FEMALE', 'contact_number': '+1987654321', 'address': '456 Oak St, Riverside',
     'blood_group': 'O-'},
    {'mrn': 'MRN0003', 'first_name': 'Robert', 'last_name': 'Johnson', 'date_of_birth': date(1975, 11, 30),
     'gender': 'MALE', 'contact_number': '+1122334455', 'address': '789 Pine St, Georgetown',
     'medical_history': 'Hypertension, Diabetes Type 2'},
]

INVENTORY = [
    {'name': 'Paracetamol', 'category': 'MEDICINE', 'description': 'Pain reliever and fever reducer',
     'unit': 'tablet', 'quantity': 500, 'reorder_level': 100, 'cost': Decimal('0.50'),
     'supplier': 'MediSupply Inc.', 'expiry_date': date(2027, 12, 31), 'location': 'Pharmacy'},
    {'name': 'Surgical Gloves', 'category': 'SUPPLIES',
     'description': 'Disposable latex gloves for medical procedures', 'unit': 'box', 'quantity': 50,
     'reorder_level': 20, 'cost': Decimal('10.50'), 'supplier': 'MedEquip Co.', 'location': 'Main Storage'},
    {'name': 'Blood Pressure Monitor', 'category': 'EQUIPMENT',
     'description': 'Digital blood pressure monitoring device', 'unit': 'unit', 'quantity': 15,
     'reorder_level': 5, 'cost': Decimal('120.00'), 'supplier': 'HealthTech Solutions',
     'location': 'Equipment Room'},
]

BEDS_PER_WARD = 5


class Command(BaseCommand):
    help = 'Populate the database with demo staff, patients, beds, inventory and bookings (idempotent).'

    def handle(self, *args, **options):
        self.stdout.write('Seeding database...')
        doctors = self.seed_staff()
        patients = self.seed_patients()
        self.seed_beds()
        self.seed_inventory()
        self.seed_appointments(patients, doctors)
        self.seed_admission(patients, doctors)
        self.stdout.write(self.style.SUCCESS('Seeding complete.'))

    def seed_staff(self):
        doctors = []
        for row in STAFF:
            user, created = user_service.ensure_user(**row)
            self.stdout.write(f"  {'created' if created else 'updated'} user {user.email} ({user.role})")
            if user.is_doctor:
                doctors.append(user)
        return doctors

    def seed_patients(self):
        patients = []
        for row in PATIENTS:
            fields = {k: v for k, v in row.items() if k != 'mrn'}
            patient, _ = Patient.objects.update_or_create(mrn=row['mrn'], defaults=fields)
            patients.append(patient)
        self.stdout.write(f'  {len(patients)} patients')
        return patients

    def seed_beds(self):
        for index, (ward, _) in enumerate(Bed.WARD_CHOICES):
            for room in range(1, BEDS_PER_WARD + 1):
                bed_number = f'{chr(65 + index)}-{room}01'
                bed, created = Bed.objects.get_or_create(bed_number=bed_number, defaults={'ward': ward})
                if not created and bed.ward != ward:
                    bed.ward = ward
                    bed.save(update_fields=['ward', 'updated_at'])
        self.stdout.write(f'  {Bed.objects.count()} beds')

    def seed_inventory(self):
        for row in INVENTORY:
            fields = {k: v for k, v in row.items() if k != 'name'}
            InventoryItem.objects.update_or_create(name=row['name'], defaults=fields)
        self.stdout.write(f'  {len(INVENTORY)} inventory items')

    def seed_appointments(self, patients, doctors):
        if not doctors:
            return
        today = timezone.localdate()
        plan = [
            (patients[0], doctors[0], today, '09:30', 'GENERAL'),
            (patients[1], doctors[0], today, '10:15', 'FOLLOW_UP'),
            (patients[2], doctors[-1], today + timedelta(days=1), '14:00', 'SPECIALIST'),
        ]
        for patient, doctor, day, time, kind in plan:
            if Appointment.objects.filter(patient=patient, doctor=doctor, date=day, time=time).exists():
                continue
            appt = appointment_service.create_appointment(
                patient_id=patient.id, doctor_id=doctor.id, date=day, time=time,
                status=Appointment.STATUS_SCHEDULED, type=kind,
            )
            self.stdout.write(f'  booked {patient.mrn} on {appt.date} #{appt.queue_number}')

    def seed_admission(self, patients, doctors):
        if not doctors or Admission.objects.filter(status=Admission.STATUS_ACTIVE).exists():
            return
        bed = Bed.objects.filter(status=Bed.STATUS_AVAILABLE).order_by('bed_number').first()
        if not bed:
            return
        admission = admission_service.admit(
            patient_id=patients[0].id, bed_id=bed.id, doctor_id=doctors[0].id,
            admission_date=timezone.now(), diagnosis='Pneumonia',
        )
        self.stdout.write(f'  admitted {patients[0].mrn} to bed {bed.bed_number} ({admission.id})')
