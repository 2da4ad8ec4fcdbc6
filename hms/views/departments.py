from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsAdmin
from hms.serializers.departments import (
    DepartmentCreateSerializer,
    DepartmentListQuerySerializer,
    DepartmentSerializer,
    DepartmentUpdateSerializer,
)
from hms.services import departments as dept_service


@api_view(['GET', 'POST'])
@permission_classes([IsAdmin])
def departments(request):
    if request.method == 'POST':
        s = DepartmentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        dept = dept_service.create_department(**s.validated_data, actor=request.user)
        return Response(DepartmentSerializer(dept).data, status=status.HTTP_201_CREATED)

    q = DepartmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page, page_size = q.validated_data['page'], q.validated_data['page_size']
    items, total = dept_service.list_departments(page, page_size)
    return Response({
        'data': DepartmentSerializer(items, many=True).data,
        'total_count': total,
        'page': page,
        'page_size': page_size,
        'total_pages': max(1, (total + page_size - 1) // page_size),
    })


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdmin])
def department_detail(request, dept_id):
    if request.method == 'GET':
        return Response(DepartmentSerializer(dept_service.get_department(dept_id)).data)
    if request.method == 'DELETE':
        dept_service.delete_department(dept_id, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = DepartmentUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    dept = dept_service.update_department(dept_id, **s.validated_data, actor=request.user)
    return Response(DepartmentSerializer(dept).data)
