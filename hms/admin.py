"""
Django admin registrations.

Gives superusers a read/write view of every table at ``/admin/``.  The
admin bypasses the service layer, so it is also where an operator can
lock a consultation by clearing ``is_editable``.
"""

from django.contrib import admin

from .models import (
    Appointment,
    AuditEvent,
    Availability,
    Consultation,
    Department,
    Doctor,
    HospitalConfig,
    Nurse,
    Patient,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'is_active', 'is_staff', 'created_at')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name')
    readonly_fields = ('role', 'password', 'last_login', 'date_joined')


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('user', 'specialization', 'department', 'consultation_fee', 'is_available')
    list_filter = ('department', 'is_available')
    search_fields = ('user__username', 'license_number', 'specialization')


@admin.register(Nurse)
class NurseAdmin(admin.ModelAdmin):
    list_display = ('user', 'department', 'shift')
    list_filter = ('department', 'shift')
    search_fields = ('user__username', 'license_number')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('user', 'date_of_birth', 'gender', 'blood_group')
    search_fields = ('user__username', 'user__email')


@admin.register(Availability)
class AvailabilityAdmin(admin.ModelAdmin):
    list_display = ('doctor', 'day_of_week', 'start_time', 'end_time', 'max_appointments')
    list_filter = ('day_of_week',)


@admin.register(HospitalConfig)
class HospitalConfigAdmin(admin.ModelAdmin):
    list_display = ('id', 'working_hours_start', 'working_hours_end', 'appointment_duration_minutes',
                    'enable_patient_self_registration', 'created_at')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'appointment_date', 'duration_minutes', 'status')
    list_filter = ('status',)
    date_hierarchy = 'appointment_date'


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('id', 'appointment', 'patient', 'doctor', 'is_editable', 'created_at')
    list_filter = ('is_editable',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user_id', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id',)
    readonly_fields = ('user_id', 'action', 'object_type', 'object_id', 'detail', 'created_at')
