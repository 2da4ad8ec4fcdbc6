"""
Doctor weekly availability slots.

Slots are stored and listed only.  Appointment booking never reads them.
"""
from datetime import datetime, time
from typing import List

from hms.exceptions import InvalidInput, NotFound
from hms.models import Availability, Doctor
from hms.services.audit import log_action

DAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


def parse_hhmm(value, field: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(value or '', '%H:%M').time()
    except (TypeError, ValueError):
        raise InvalidInput(f'invalid {field} format. use HH:MM (24-hour format)')


def create_availability(*, doctor_id, day_of_week: str, start_time, end_time, max_appointments: int,
                        actor=None) -> Availability:
    if day_of_week not in DAYS:
        raise InvalidInput('invalid day of week. use: ' + ', '.join(DAYS))
    start = parse_hhmm(start_time, 'start time')
    end = parse_hhmm(end_time, 'end time')
    if start >= end:
        raise InvalidInput('start time must be before end time')
    if max_appointments is None or max_appointments <= 0:
        raise InvalidInput('max appointments must be greater than 0')

    doctor = Doctor.objects.filter(id=doctor_id).first()
    if doctor is None:
        raise NotFound('doctor not found')

    slot = Availability.objects.create(
        doctor=doctor, day_of_week=day_of_week, start_time=start, end_time=end,
        max_appointments=max_appointments,
    )
    log_action(actor=actor, action='availability.create', object_type='availability', object_id=slot.id,
               detail={'doctor_id': str(doctor.id), 'day': day_of_week})
    return slot


def list_availability(doctor_id) -> List[Availability]:
    if not Doctor.objects.filter(id=doctor_id).exists():
        raise NotFound('doctor not found')
    slots = Availability.objects.filter(doctor_id=doctor_id)
    return sorted(slots, key=lambda s: (DAYS.index(s.day_of_week), s.start_time))
