from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsAdmin
from hms.serializers.hospital_config import (
    HospitalConfigSerializer,
    HospitalConfigUpdateSerializer,
    HospitalConfigWriteSerializer,
)
from hms.services import hospital_config as config_service


@api_view(['GET', 'POST'])
@permission_classes([IsAdmin])
def hospital_configs(request):
    if request.method == 'POST':
        s = HospitalConfigWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        cfg = config_service.create_config(**s.validated_data, actor=request.user)
        return Response(HospitalConfigSerializer(cfg).data, status=status.HTTP_201_CREATED)
    return Response(HospitalConfigSerializer(config_service.list_configs(), many=True).data)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdmin])
def hospital_config_detail(request, config_id):
    if request.method == 'GET':
        return Response(HospitalConfigSerializer(config_service.get_config(config_id)).data)
    if request.method == 'DELETE':
        config_service.delete_config(config_id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = HospitalConfigUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    cfg = config_service.update_config(config_id, **s.validated_data, actor=request.user)
    return Response(HospitalConfigSerializer(cfg).data)
