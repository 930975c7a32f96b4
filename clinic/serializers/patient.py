from rest_framework import serializers

from clinic.models import Patient
from clinic.serializers.common import SanitizedCharField, messages, optional_text


class PatientWriteSerializer(serializers.Serializer):
    """Body of ``PUT /api/patients/<id>``; ``mrn`` may be omitted."""
    mrn = SanitizedCharField(max_length=64, required=False, error_messages=messages('Medical Record Number (MRN) is required'))
    firstName = SanitizedCharField(max_length=150, error_messages=messages('First name is required'))
    lastName = SanitizedCharField(max_length=150, error_messages=messages('Last name is required'))
    dateOfBirth = serializers.DateField(error_messages=messages('Valid date of birth is required'))
    gender = serializers.ChoiceField(choices=Patient.GENDER_CHOICES, error_messages=messages('Valid gender is required'))
    contactNumber = SanitizedCharField(max_length=32, error_messages=messages('Contact number is required'))
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True, error_messages=messages('Valid email is required'))
    address = SanitizedCharField(error_messages=messages('Address is required'))
    bloodGroup = optional_text(max_length=8)
    allergies = optional_text()
    medicalHistory = optional_text()


class PatientCreateSerializer(PatientWriteSerializer):
    mrn = SanitizedCharField(max_length=64, error_messages=messages('Medical Record Number (MRN) is required'))
