from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.models import Role
from hms.permissions import IsAuthenticatedIdentity, RoleForMethods
from hms.serializers.consultations import (
    ConsultationCreateSerializer,
    ConsultationListQuerySerializer,
    ConsultationSerializer,
    ConsultationUpdateSerializer,
)
from hms.services import consultations as consultation_service

CLINICIAN_ROLES = (Role.DOCTOR, Role.ADMIN)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedIdentity, RoleForMethods({'POST'}, *CLINICIAN_ROLES)])
def consultations(request):
    if request.method == 'POST':
        s = ConsultationCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        consult = consultation_service.create_consultation(
            vd['appointment_id'], vd['patient_id'], vd['doctor_id'], vd['diagnosis'], vd['notes'],
            actor=request.user,
        )
        return Response(ConsultationSerializer(consult).data, status=status.HTTP_201_CREATED)

    q = ConsultationListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = consultation_service.list_consultations_for_patient(q.validated_data['patient_id'])
    return Response(ConsultationSerializer(items, many=True).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticatedIdentity, RoleForMethods({'PUT'}, *CLINICIAN_ROLES)])
def consultation_detail(request, consultation_id):
    if request.method == 'GET':
        return Response(ConsultationSerializer(consultation_service.get_consultation(consultation_id)).data)

    s = ConsultationUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    consult = consultation_service.update_consultation(
        consultation_id, s.validated_data['diagnosis'], s.validated_data['notes'], actor=request.user,
    )
    return Response(ConsultationSerializer(consult).data)


@api_view(['GET'])
@permission_classes([IsAuthenticatedIdentity])
def consultation_for_appointment(request, appointment_id):
    consult = consultation_service.get_consultation_for_appointment(appointment_id)
    return Response(ConsultationSerializer(consult).data)
