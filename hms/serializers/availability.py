from rest_framework import serializers


class AvailabilityCreateSerializer(serializers.Serializer):
    doctor_id = serializers.UUIDField()
    day_of_week = serializers.CharField()
    start_time = serializers.CharField()
    end_time = serializers.CharField()
    max_appointments = serializers.IntegerField()


class AvailabilitySerializer(serializers.Serializer):
    availability_id = serializers.UUIDField(source='id')
    doctor_id = serializers.UUIDField()
    day_of_week = serializers.CharField()
    start_time = serializers.TimeField(format='%H:%M')
    end_time = serializers.TimeField(format='%H:%M')
    max_appointments = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
