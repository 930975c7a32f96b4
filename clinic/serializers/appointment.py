from rest_framework import serializers

from clinic.models import Appointment
from clinic.serializers.common import messages, optional_text

# 24h clock, hour may omit its leading zero ("9:30" and "09:30")
TIME_REGEX = r'^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$'


class AppointmentCreateSerializer(serializers.Serializer):
    patientId = serializers.UUIDField(error_messages=messages('Valid patient ID is required'))
    doctorId = serializers.CharField(max_length=191, error_messages=messages('Valid doctor ID is required'))
    date = serializers.DateField(error_messages=messages('Valid date is required'))
    time = serializers.RegexField(TIME_REGEX, error_messages=messages('Valid time is required (HH:MM)'))
    status = serializers.ChoiceField(choices=Appointment.STATUS_CHOICES, error_messages=messages('Valid status is required'))
    type = serializers.ChoiceField(choices=Appointment.TYPE_CHOICES, error_messages=messages('Valid type is required'))
    notes = optional_text()

    def validate_time(self, v):
        hours, minutes = v.split(':')
        return f"{int(hours):02d}:{minutes}"


class AppointmentUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Appointment.STATUS_CHOICES, required=False, error_messages=messages('Valid status is required')
    )
    notes = optional_text()
