from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsAdmin
from hms.serializers.users import StaffUserCreateSerializer, UserListQuerySerializer, UserSerializer
from hms.services import users as user_service


@api_view(['GET', 'POST'])
@permission_classes([IsAdmin])
def users(request):
    if request.method == 'POST':
        s = StaffUserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = user_service.create_staff_user(**s.validated_data, actor=request.user)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    q = UserListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items, total = user_service.list_users(q.validated_data.get('limit'), q.validated_data.get('offset'))
    return Response({'users': UserSerializer(items, many=True).data, 'total': total})


@api_view(['GET'])
@permission_classes([IsAdmin])
def user_detail(request, user_id):
    return Response(UserSerializer(user_service.get_user(user_id)).data)
