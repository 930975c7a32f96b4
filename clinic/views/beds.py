"""
Bed endpoints.

Occupancy is never set here directly: a bed turns OCCUPIED through
``POST /api/admissions`` and back through a discharge.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Bed
from clinic.serializers.bed import BedCreateSerializer, BedUpdateSerializer
from clinic.serializers.common import path_choice, path_id, validated
from clinic.services import beds as bed_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def beds(request):
    if request.method == 'GET':
        return Response([bed_service.format_bed(b) for b in bed_service.list_beds()])
    data = validated(BedCreateSerializer, request.data)
    bed = bed_service.create_bed(
        bed_number=data['bedNumber'],
        ward=data['ward'],
        status=data.get('status') or Bed.STATUS_AVAILABLE,
        notes=data.get('notes'),
    )
    return Response(bed_service.format_bed(bed), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def beds_by_ward(request, ward):
    ward = path_choice(ward, Bed.WARD_CHOICES, 'ward', 'ward type')
    return Response([bed_service.format_bed(b) for b in bed_service.list_by_ward(ward)])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def beds_available(request):
    return Response([bed_service.format_bed(b, with_patient=False) for b in bed_service.list_available()])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def bed_detail(request, pk):
    bed_id = path_id(pk, 'bed')
    if request.method == 'GET':
        return Response(bed_service.format_bed(bed_service.get_bed(bed_id)))
    if request.method == 'PUT':
        data = validated(BedUpdateSerializer, request.data)
        return Response(bed_service.format_bed(bed_service.update_bed(bed_id, data)))
    bed_service.delete_bed(bed_id)
    return Response({'message': 'Bed deleted successfully'})
