"""
Admission endpoints.

Creating an admission occupies its bed; a ``PUT`` with status DISCHARGED
or TRANSFERRED frees it again.  Deleting an admission is an administrative
correction and is limited to the ADMIN role.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.admission import AdmissionCreateSerializer, AdmissionUpdateSerializer
from clinic.serializers.common import path_id, validated
from clinic.services import admissions as admission_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def admissions(request):
    if request.method == 'GET':
        return Response([admission_service.format_admission(a) for a in admission_service.list_admissions()])
    data = validated(AdmissionCreateSerializer, request.data)
    admission = admission_service.admit(
        patient_id=data['patientId'],
        bed_id=data['bedId'],
        doctor_id=data['doctorId'],
        admission_date=data['admissionDate'],
        expected_discharge_date=data.get('expectedDischargeDate'),
        diagnosis=data.get('diagnosis'),
        notes=data.get('notes'),
    )
    return Response(admission_service.format_admission(admission), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def admissions_active(request):
    return Response([admission_service.format_admission(a) for a in admission_service.list_active()])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def admission_detail(request, pk):
    admission_id = path_id(pk, 'admission')
    if request.method == 'GET':
        return Response(admission_service.format_admission(admission_service.get_admission(admission_id)))
    if request.method == 'PUT':
        data = validated(AdmissionUpdateSerializer, request.data)
        return Response(admission_service.format_admission(admission_service.update_admission(admission_id, data)))
    if not IsAdminRole().has_permission(request, None):
        raise PermissionDenied(IsAdminRole.message)
    admission_service.delete_admission(admission_id)
    return Response({'message': 'Admission deleted successfully'})
