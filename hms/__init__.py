"""Hospital management application.

This package contains the models, services, serializers, views and route
registrations for the hospital administration API: users and roles,
departments, staff and patient profiles, appointments and consultations.
"""
