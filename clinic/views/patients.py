"""
Patient endpoints.

``/api/patients`` lists and registers patients; ``/api/patients/<id>``
reads, replaces and deletes one.  A patient's appointment and admission
history are exposed as sub-resources.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.common import path_id, validated
from clinic.serializers.patient import PatientCreateSerializer, PatientWriteSerializer
from clinic.services import admissions as admission_service
from clinic.services import appointments as appointment_service
from clinic.services import patients as patient_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients(request):
    if request.method == 'GET':
        return Response([patient_service.format_patient(p) for p in patient_service.list_patients()])
    data = validated(PatientCreateSerializer, request.data)
    patient = patient_service.create_patient(data)
    return Response(patient_service.format_patient(patient), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk):
    patient_id = path_id(pk, 'patient')
    if request.method == 'GET':
        return Response(patient_service.format_patient(patient_service.get_patient(patient_id)))
    if request.method == 'PUT':
        data = validated(PatientWriteSerializer, request.data)
        patient = patient_service.update_patient(patient_id, data)
        return Response(patient_service.format_patient(patient))
    patient_service.delete_patient(patient_id)
    return Response({'message': 'Patient deleted successfully'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_appointments(request, pk):
    patient_id = path_id(pk, 'patient')
    patient_service.get_patient(patient_id)
    return Response([
        appointment_service.format_appointment(a, with_patient=False)
        for a in appointment_service.list_for_patient(patient_id)
    ])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_admissions(request, pk):
    patient_id = path_id(pk, 'patient')
    patient_service.get_patient(patient_id)
    return Response([
        admission_service.format_admission(a, with_patient=False)
        for a in admission_service.list_for_patient(patient_id)
    ])
