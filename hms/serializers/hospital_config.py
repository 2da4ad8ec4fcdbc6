from rest_framework import serializers


class HospitalConfigWriteSerializer(serializers.Serializer):
    working_hours_start = serializers.CharField()
    working_hours_end = serializers.CharField()
    appointment_duration_minutes = serializers.IntegerField(required=False, allow_null=True)
    max_same_day_cancellation_hours = serializers.IntegerField(required=False, allow_null=True)
    enable_patient_self_registration = serializers.BooleanField(required=False, allow_null=True, default=None)


class HospitalConfigUpdateSerializer(HospitalConfigWriteSerializer):
    appointment_duration_minutes = serializers.IntegerField(min_value=1)
    max_same_day_cancellation_hours = serializers.IntegerField(min_value=0)


class HospitalConfigSerializer(serializers.Serializer):
    config_id = serializers.UUIDField(source='id')
    working_hours_start = serializers.TimeField(format='%H:%M')
    working_hours_end = serializers.TimeField(format='%H:%M')
    appointment_duration_minutes = serializers.IntegerField()
    max_same_day_cancellation_hours = serializers.IntegerField()
    enable_patient_self_registration = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
