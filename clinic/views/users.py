from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.authentication import subject_id
from clinic.services import users as user_service


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctors(request):
    """Doctors for booking and admission forms (public profile fields only)."""
    return Response(user_service.list_doctors())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    user = user_service.get_current_user(subject_id(request))
    if not user:
        raise NotFound('User not found')
    return Response(user_service.format_user(user))
