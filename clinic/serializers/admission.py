from rest_framework import serializers

from clinic.models import Admission
from clinic.serializers.common import messages, optional_text


class AdmissionCreateSerializer(serializers.Serializer):
    patientId = serializers.UUIDField(error_messages=messages('Valid patient ID is required'))
    bedId = serializers.UUIDField(error_messages=messages('Valid bed ID is required'))
    doctorId = serializers.CharField(max_length=191, error_messages=messages('Valid doctor ID is required'))
    admissionDate = serializers.DateField(error_messages=messages('Valid admission date is required'))
    expectedDischargeDate = serializers.DateField(
        required=False, allow_null=True, error_messages=messages('Valid expected discharge date is required')
    )
    diagnosis = optional_text()
    notes = optional_text()

    def validate(self, attrs):
        expected = attrs.get('expectedDischargeDate')
        if expected and expected < attrs['admissionDate']:
            raise serializers.ValidationError(
                {'expectedDischargeDate': 'Expected discharge date cannot be before the admission date'}
            )
        return attrs


class AdmissionUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Admission.STATUS_CHOICES, required=False, error_messages=messages('Valid status is required')
    )
    dischargeDate = serializers.DateField(
        required=False, allow_null=True, error_messages=messages('Valid discharge date is required')
    )
    diagnosis = optional_text()
    notes = optional_text()
