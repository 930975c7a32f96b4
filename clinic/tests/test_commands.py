import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from clinic.models import Admission, Appointment, Bed, InventoryItem, Patient, User

pytestmark = pytest.mark.django_db


def test_seed_data_is_idempotent():
    call_command('seed_data')
    call_command('seed_data')
    assert User.objects.filter(role=User.ROLE_DOCTOR).count() == 2
    assert Patient.objects.count() == 3
    assert Bed.objects.count() == 30
    assert InventoryItem.objects.count() == 3
    assert Appointment.objects.count() == 3
    assert Admission.objects.filter(status=Admission.STATUS_ACTIVE).count() == 1
    assert Bed.objects.filter(status=Bed.STATUS_OCCUPIED).count() == 1


def test_register_staff_creates_then_updates():
    call_command('register_staff', '--id', 'user_x', '--email', 'x@example.com',
                 '--first-name', 'Xi', '--last-name', 'Lo', '--role', 'DOCTOR')
    call_command('register_staff', '--id', 'user_x', '--email', 'x@example.com',
                 '--first-name', 'Xi', '--last-name', 'Lo', '--role', 'ADMIN')
    assert User.objects.get(pk='user_x').role == User.ROLE_ADMIN


def test_register_staff_rejects_taken_email(doctor):
    with pytest.raises(CommandError):
        call_command('register_staff', '--id', 'user_y', '--email', doctor.email,
                     '--first-name', 'Y', '--last-name', 'Z', '--role', 'DOCTOR')
