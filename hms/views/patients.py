from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from hms.permissions import IsPatient
from hms.serializers.patients import PatientProfileCreateSerializer, PatientSerializer
from hms.services.patients import create_patient_profile


@api_view(['POST'])
@permission_classes([IsPatient])
def patient_profile(request):
    """Create the calling patient's own profile."""
    s = PatientProfileCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = create_patient_profile(user_id=request.user.user_id, **s.validated_data, actor=request.user)
    return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)
