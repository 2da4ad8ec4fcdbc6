from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.models import Role
from hms.permissions import IsAuthenticatedIdentity, RoleForMethods
from hms.serializers.appointments import (
    AppointmentCreateSerializer,
    AppointmentListQuerySerializer,
    AppointmentSerializer,
    AppointmentUpdateSerializer,
)
from hms.services import appointments as appointment_service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedIdentity])
def appointments(request):
    if request.method == 'POST':
        s = AppointmentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        appt = appointment_service.create_appointment(
            vd['patient_id'], vd['doctor_id'], vd['appointment_date'], vd['duration_minutes'], vd['notes'],
            actor=request.user,
        )
        return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)

    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    patient_id, doctor_id = q.validated_data.get('patient_id'), q.validated_data.get('doctor_id')
    if patient_id:
        items = appointment_service.list_appointments_for_patient(patient_id)
        if doctor_id:
            items = [a for a in items if a.doctor_id == doctor_id]
    else:
        items = appointment_service.list_appointments_for_doctor(doctor_id)
    return Response(AppointmentSerializer(items, many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticatedIdentity, RoleForMethods({'DELETE'}, Role.ADMIN)])
def appointment_detail(request, appointment_id):
    if request.method == 'GET':
        return Response(AppointmentSerializer(appointment_service.get_appointment(appointment_id)).data)

    if request.method == 'DELETE':
        appointment_service.delete_appointment(appointment_id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = AppointmentUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appt = appointment_service.update_appointment(
        appointment_id, vd['appointment_date'], vd['duration_minutes'], vd['status'], vd['notes'],
        actor=request.user,
    )
    return Response(AppointmentSerializer(appt).data)
