from rest_framework import serializers

from clinic.models import InventoryItem
from clinic.serializers.common import SanitizedCharField, messages, optional_text


class InventoryItemSerializer(serializers.Serializer):
    name = SanitizedCharField(max_length=255, error_messages=messages('Name is required'))
    category = serializers.ChoiceField(
        choices=InventoryItem.CATEGORY_CHOICES, error_messages=messages('Valid category is required')
    )
    description = optional_text()
    unit = SanitizedCharField(max_length=32, error_messages=messages('Unit is required'))
    quantity = serializers.IntegerField(min_value=0, error_messages=messages('Valid quantity is required'))
    reorderLevel = serializers.IntegerField(min_value=1, error_messages=messages('Valid reorder level is required'))
    cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, coerce_to_string=False,
        error_messages=messages('Valid cost is required'),
    )
    supplier = optional_text(max_length=255)
    expiryDate = serializers.DateField(required=False, allow_null=True, error_messages=messages('Valid expiry date is required'))
    location = optional_text(max_length=255)
