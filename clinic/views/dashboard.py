"""
Dashboard endpoints.

Read-only figures for the staff landing page; see
``clinic.services.dashboard`` for how each one is derived.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services import dashboard as dashboard_service


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def summary(request):
    return Response(dashboard_service.summary())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def appointment_stats(request):
    return Response(dashboard_service.appointment_stats())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def bed_stats(request):
    return Response(dashboard_service.bed_stats())
