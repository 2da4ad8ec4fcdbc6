from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsAdmin, IsAuthenticatedIdentity
from hms.serializers.availability import AvailabilityCreateSerializer, AvailabilitySerializer
from hms.services import availability as availability_service


@api_view(['POST'])
@permission_classes([IsAdmin])
def create_availability(request):
    s = AvailabilityCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    slot = availability_service.create_availability(**s.validated_data, actor=request.user)
    return Response(AvailabilitySerializer(slot).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticatedIdentity])
def doctor_availability(request, doctor_id):
    slots = availability_service.list_availability(doctor_id)
    return Response(AvailabilitySerializer(slots, many=True).data)
