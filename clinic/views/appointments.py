from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.appointment import AppointmentCreateSerializer, AppointmentUpdateSerializer
from clinic.serializers.common import path_id, validated
from clinic.services import appointments as appointment_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    if request.method == 'GET':
        return Response([appointment_service.format_appointment(a) for a in appointment_service.list_appointments()])
    data = validated(AppointmentCreateSerializer, request.data)
    appt = appointment_service.create_appointment(
        patient_id=data['patientId'],
        doctor_id=data['doctorId'],
        date=data['date'],
        time=data['time'],
        status=data['status'],
        type=data['type'],
        notes=data.get('notes'),
    )
    return Response(appointment_service.format_appointment(appt), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def appointments_today(request):
    """Today's appointments in workflow order, then by time."""
    return Response([appointment_service.format_appointment(a) for a in appointment_service.list_today()])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, pk):
    appointment_id = path_id(pk, 'appointment')
    if request.method == 'GET':
        return Response(appointment_service.format_appointment(appointment_service.get_appointment(appointment_id)))
    if request.method == 'PUT':
        data = validated(AppointmentUpdateSerializer, request.data)
        appt = appointment_service.update_appointment(appointment_id, data)
        return Response(appointment_service.format_appointment(appt))
    appointment_service.delete_appointment(appointment_id)
    return Response({'message': 'Appointment deleted successfully'})
