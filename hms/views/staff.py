from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsAdmin
from hms.serializers.staff import DoctorCreateSerializer, DoctorSerializer, NurseCreateSerializer, NurseSerializer
from hms.services import staff as staff_service


@api_view(['POST'])
@permission_classes([IsAdmin])
def create_doctor(request):
    s = DoctorCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = staff_service.create_doctor(**s.validated_data, actor=request.user)
    return Response(DoctorSerializer(doctor).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAdmin])
def create_nurse(request):
    s = NurseCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    nurse = staff_service.create_nurse(**s.validated_data, actor=request.user)
    return Response(NurseSerializer(nurse).data, status=status.HTTP_201_CREATED)
