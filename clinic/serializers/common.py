"""
Shared validation helpers for the request serializers.

Every endpoint validates its raw input with a DRF serializer before any
service call.  ``validated`` runs a serializer and raises a
``ValidationError`` tagged with where the input came from (``body``,
``params`` or ``query``) so the error handler can report it.
"""
from __future__ import annotations

import html

import bleach
from rest_framework import serializers
from rest_framework.exceptions import ValidationError


def messages(msg: str) -> dict:
    """Use one message for every way a field can be wrong."""
    return {
        'required': msg,
        'blank': msg,
        'null': msg,
        'invalid': msg,
        'invalid_choice': msg,
        'min_value': msg,
        'max_value': msg,
        'max_length': msg,
        'max_string_length': msg,
        'max_digits': msg,
        'max_decimal_places': msg,
        'max_whole_digits': msg,
        'date': msg,
    }


class SanitizedCharField(serializers.CharField):
    """CharField that strips markup tags from free text.

    ``bleach`` entity-encodes what it keeps; the value is unescaped again so
    plain text such as ``BP < 90 & HR > 120`` is stored as sent.
    """

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return html.unescape(bleach.clean(value.strip(), tags=[], strip=True))


def optional_text(**kwargs) -> SanitizedCharField:
    return SanitizedCharField(required=False, allow_blank=True, allow_null=True, **kwargs)


def validated(serializer_class, data, *, location: str = 'body', **kwargs) -> dict:
    s = serializer_class(data=data, **kwargs)
    if not s.is_valid():
        exc = ValidationError(s.errors)
        exc.location = location
        raise exc
    return s.validated_data


class IdPathSerializer(serializers.Serializer):
    id = serializers.UUIDField()

    def __init__(self, *args, label: str = 'record', **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['id'].error_messages.update(messages(f'Invalid {label} ID'))


def path_id(pk, label: str):
    """Validate a UUID path segment, e.g. ``/api/beds/<id>``."""
    return validated(IdPathSerializer, {'id': pk}, location='params', label=label)['id']


def path_choice(value, choices, name: str, label: str) -> str:
    """Validate an enum path segment such as ``/api/beds/ward/<ward>``."""
    field = serializers.ChoiceField(choices=choices, error_messages=messages(f'Invalid {label}'))
    serializer_class = type('PathChoiceSerializer', (serializers.Serializer,), {name: field})
    return validated(serializer_class, {name: value}, location='params')[name]
