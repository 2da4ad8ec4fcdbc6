from rest_framework import serializers

from hms.models import Role
from hms.serializers.auth import SignupSerializer


class UserSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(source='id')
    username = serializers.CharField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    phone = serializers.CharField()
    role = serializers.CharField()
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class StaffUserCreateSerializer(SignupSerializer):
    # the service rejects PATIENT with a pointer to the signup endpoint
    role = serializers.ChoiceField(choices=Role.values)


class UserListQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False)
    offset = serializers.IntegerField(required=False)
