from rest_framework import serializers


class DoctorCreateSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    specialization = serializers.CharField(max_length=255)
    license_number = serializers.CharField(max_length=100)
    department_id = serializers.UUIDField()
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2)


class DoctorSerializer(serializers.Serializer):
    doctor_id = serializers.UUIDField(source='id')
    user_id = serializers.UUIDField()
    specialization = serializers.CharField()
    license_number = serializers.CharField()
    department_id = serializers.UUIDField()
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)
    is_available = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class NurseCreateSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    license_number = serializers.CharField(max_length=100)
    department_id = serializers.UUIDField()
    shift = serializers.CharField(max_length=50)


class NurseSerializer(serializers.Serializer):
    nurse_id = serializers.UUIDField(source='id')
    user_id = serializers.UUIDField()
    license_number = serializers.CharField()
    department_id = serializers.UUIDField()
    shift = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
