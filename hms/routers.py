"""
URL mappings for the hospital API.

Paths carry no trailing slash.  Role requirements are declared on the
views themselves; see ``hms.permissions``.
"""
from django.urls import path

from .views import appointments, availability, consultations, departments, health, hospital_config, patients, staff, users
from .views.auth import login_view, me_view, signup_view

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),

    # auth
    path('api/auth/signup', signup_view, name='signup'),
    path('api/auth/login', login_view, name='login'),
    path('api/auth/me', me_view, name='me'),

    # admin: users, departments, staff, availability, hospital config
    path('api/admin/users', users.users, name='admin-users'),
    path('api/admin/users/<uuid:user_id>', users.user_detail, name='admin-user-detail'),
    path('api/admin/departments', departments.departments, name='admin-departments'),
    path('api/admin/departments/<uuid:dept_id>', departments.department_detail, name='admin-department-detail'),
    path('api/admin/doctors', staff.create_doctor, name='admin-doctors'),
    path('api/admin/doctors/availability', availability.create_availability, name='admin-doctor-availability'),
    path('api/admin/nurses', staff.create_nurse, name='admin-nurses'),
    path('api/admin/hospital-configs', hospital_config.hospital_configs, name='admin-hospital-configs'),
    path('api/admin/hospital-configs/<uuid:config_id>', hospital_config.hospital_config_detail,
         name='admin-hospital-config-detail'),

    # doctors & patients
    path('api/doctors/<uuid:doctor_id>/availability', availability.doctor_availability, name='doctor-availability'),
    path('api/patients/patientprofile', patients.patient_profile, name='patient-profile'),

    # appointments
    path('api/appointments', appointments.appointments, name='appointments'),
    path('api/appointments/<uuid:appointment_id>', appointments.appointment_detail, name='appointment-detail'),

    # consultations
    path('api/consultations', consultations.consultations, name='consultations'),
    path('api/consultations/appointment/<uuid:appointment_id>', consultations.consultation_for_appointment,
         name='consultation-for-appointment'),
    path('api/consultations/<uuid:consultation_id>', consultations.consultation_detail, name='consultation-detail'),
]
