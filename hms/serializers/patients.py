from rest_framework import serializers


class PatientProfileCreateSerializer(serializers.Serializer):
    # free form; parsed by the patient service
    date_of_birth = serializers.CharField()
    gender = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    blood_group = serializers.CharField(max_length=5, required=False, allow_blank=True, default='')
    emergency_contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    emergency_contact_phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    medical_history = serializers.CharField(required=False, allow_blank=True, default='')


class PatientSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField(source='id')
    user_id = serializers.UUIDField()
    date_of_birth = serializers.DateField()
    gender = serializers.CharField()
    blood_group = serializers.CharField()
    emergency_contact_name = serializers.CharField()
    emergency_contact_phone = serializers.CharField()
    medical_history = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
