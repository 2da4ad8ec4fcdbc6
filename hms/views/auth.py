"""
Signup, login and "who am I" endpoints.

Signup and login are the only API routes reachable without a bearer
token.  Both are rate limited per client address.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from hms.permissions import IsAuthenticatedIdentity
from hms.serializers.auth import LoginSerializer, SignupSerializer
from hms.serializers.users import UserSerializer
from hms.services import users as user_service
from hms.services.patients import get_patient_for_user
from hms.services.tokens import get_token_service


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


class SignupRateThrottle(AnonRateThrottle):
    scope = 'signup'


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([SignupRateThrottle])
def signup_view(request):
    """Patient self registration.  Any ``role`` in the body is ignored."""
    s = SignupSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = user_service.signup_patient(**s.validated_data)
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    tokens = get_token_service()
    token, user = user_service.login(s.validated_data['email'], s.validated_data['password'], token_service=tokens)
    return Response({
        'token': token,
        'token_type': 'Bearer',
        'expires_in': int(tokens.lifetime.total_seconds()),
        'role': user.role,
        'user': UserSerializer(user).data,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticatedIdentity])
def me_view(request):
    """The caller's account plus the id of their profile row, if any."""
    user = user_service.get_user(request.user.user_id)
    data = UserSerializer(user).data
    patient = get_patient_for_user(user.id)
    # reverse one-to-one access raises an AttributeError subclass when unset
    doctor = getattr(user, 'doctor_profile', None)
    nurse = getattr(user, 'nurse_profile', None)
    data['patient_id'] = str(patient.id) if patient else None
    data['doctor_id'] = str(doctor.id) if doctor else None
    data['nurse_id'] = str(nurse.id) if nurse else None
    return Response(data)
