"""
API exceptions and the unified DRF exception handler.

Services raise the exceptions below; the handler turns every failure into
one of two body shapes:

* ``{"errors": [...]}`` for field validation failures (400), one entry per
  violated field;
* ``{"error": true, "message": "..."}`` for everything else.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ConflictError(APIException):
    """The request is well formed but breaks a business rule."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request conflicts with the current state'
    default_code = 'conflict'


class BedUnavailable(ConflictError):
    default_detail = 'Bed is not available'
    default_code = 'bed_unavailable'


class DuplicateActiveAdmission(ConflictError):
    default_detail = 'Patient already has an active admission'
    default_code = 'duplicate_active_admission'


class ReferenceNotFound(APIException):
    """An id supplied in the request body does not resolve to a record."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Referenced record not found'
    default_code = 'reference_not_found'


class PatientNotFound(ReferenceNotFound):
    default_detail = 'Patient not found'
    default_code = 'patient_not_found'


class BedNotFound(ReferenceNotFound):
    default_detail = 'Bed not found'
    default_code = 'bed_not_found'


class DoctorNotFound(ReferenceNotFound):
    default_detail = 'Valid doctor not found'
    default_code = 'doctor_not_found'


def _field_errors(detail, location: str, prefix: str = '') -> list[dict]:
    if isinstance(detail, dict):
        items: list[dict] = []
        for field, sub in detail.items():
            path = field if not prefix else f"{prefix}.{field}"
            if field == 'non_field_errors':
                path = prefix or '_'
            items.extend(_field_errors(sub, location, path))
        return items
    if isinstance(detail, list):
        items = []
        for sub in detail:
            items.extend(_field_errors(sub, location, prefix))
        return items
    return [{'type': 'field', 'path': prefix or '_', 'msg': str(detail), 'location': location}]


def api_exception_handler(exc, context):
    if isinstance(exc, ValidationError):
        location = getattr(exc, 'location', 'body')
        return Response({'errors': _field_errors(exc.detail, location)}, status=status.HTTP_400_BAD_REQUEST)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        set_rollback()
        view = context.get('view')
        logger.exception("Unhandled error in %s", type(view).__name__ if view else 'view')
        message = str(exc) if settings.DEBUG else 'An unexpected error occurred'
        return Response({'error': True, 'message': message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # normalize response; keep headers such as WWW-Authenticate
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail', resp.data)
    else:
        detail = resp.data
    if isinstance(exc, ConflictError):
        logger.warning("Rejected request: %s", detail)
    resp.data = {'error': True, 'message': str(detail)}
    return resp
