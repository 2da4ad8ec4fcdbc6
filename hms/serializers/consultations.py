from rest_framework import serializers


class ConsultationCreateSerializer(serializers.Serializer):
    appointment_id = serializers.UUIDField()
    patient_id = serializers.UUIDField()
    doctor_id = serializers.UUIDField()
    diagnosis = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ConsultationUpdateSerializer(serializers.Serializer):
    diagnosis = serializers.CharField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ConsultationListQuerySerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()


class ConsultationSerializer(serializers.Serializer):
    consultation_id = serializers.UUIDField(source='id')
    appointment_id = serializers.UUIDField()
    patient_id = serializers.UUIDField()
    doctor_id = serializers.UUIDField()
    diagnosis = serializers.CharField()
    notes = serializers.CharField()
    is_editable = serializers.BooleanField()
    created_at = serializers.DateTimeField()
