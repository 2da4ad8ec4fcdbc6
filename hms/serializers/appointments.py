from rest_framework import serializers

from hms.models import AppointmentStatus


class AppointmentCreateSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    doctor_id = serializers.UUIDField()
    appointment_date = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class AppointmentUpdateSerializer(serializers.Serializer):
    appointment_date = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(choices=AppointmentStatus.values)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class AppointmentListQuerySerializer(serializers.Serializer):
    patient_id = serializers.UUIDField(required=False)
    doctor_id = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if not attrs.get('patient_id') and not attrs.get('doctor_id'):
            raise serializers.ValidationError('patient_id or doctor_id is required')
        return attrs


class AppointmentSerializer(serializers.Serializer):
    appointment_id = serializers.UUIDField(source='id')
    patient_id = serializers.UUIDField()
    doctor_id = serializers.UUIDField()
    appointment_date = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField()
    status = serializers.CharField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
