from rest_framework import serializers

from clinic.models import Bed
from clinic.serializers.common import SanitizedCharField, messages, optional_text


class BedCreateSerializer(serializers.Serializer):
    bedNumber = SanitizedCharField(max_length=32, error_messages=messages('Bed number is required'))
    ward = serializers.ChoiceField(choices=Bed.WARD_CHOICES, error_messages=messages('Valid ward type is required'))
    status = serializers.ChoiceField(
        choices=Bed.STATUS_CHOICES, required=False, error_messages=messages('Valid status is required')
    )
    notes = optional_text()

    def to_internal_value(self, data):
        # Older clients send lower-case statuses ("available")
        if isinstance(data, dict) and isinstance(data.get('status'), str):
            data = {**data, 'status': data['status'].upper()}
        return super().to_internal_value(data)


class BedUpdateSerializer(serializers.Serializer):
    ward = serializers.ChoiceField(
        choices=Bed.WARD_CHOICES, required=False, error_messages=messages('Valid ward type is required')
    )
    status = serializers.ChoiceField(
        choices=Bed.STATUS_CHOICES, required=False, error_messages=messages('Valid status is required')
    )
    notes = optional_text()
