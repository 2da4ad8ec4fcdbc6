from typing import List, Optional

from django.db import transaction

from hms.exceptions import InvalidInput, NotFound
from hms.models import HospitalConfig
from hms.services.audit import log_action
from hms.services.availability import parse_hhmm

DEFAULT_APPOINTMENT_DURATION = 30
DEFAULT_CANCELLATION_HOURS = 24


def _validate(start, end, duration, cancellation_hours):
    start = parse_hhmm(start, 'working hours start')
    end = parse_hhmm(end, 'working hours end')
    if start >= end:
        raise InvalidInput('working hours start must be before working hours end')
    if duration is not None and duration <= 0:
        raise InvalidInput('appointment_duration_minutes must be greater than 0')
    if cancellation_hours is not None and cancellation_hours < 0:
        raise InvalidInput('max_same_day_cancellation_hours cannot be negative')
    return start, end


def create_config(*, working_hours_start, working_hours_end, appointment_duration_minutes: Optional[int] = None,
                  max_same_day_cancellation_hours: Optional[int] = None,
                  enable_patient_self_registration: Optional[bool] = None, actor=None) -> HospitalConfig:
    """Create a configuration row.  Unset (or zero) values get the defaults."""
    start, end = _validate(working_hours_start, working_hours_end,
                           appointment_duration_minutes, max_same_day_cancellation_hours)
    cfg = HospitalConfig.objects.create(
        working_hours_start=start,
        working_hours_end=end,
        appointment_duration_minutes=appointment_duration_minutes or DEFAULT_APPOINTMENT_DURATION,
        max_same_day_cancellation_hours=max_same_day_cancellation_hours or DEFAULT_CANCELLATION_HOURS,
        enable_patient_self_registration=(
            True if enable_patient_self_registration is None else enable_patient_self_registration
        ),
    )
    log_action(actor=actor, action='hospital_config.create', object_type='hospital_config', object_id=cfg.id)
    return cfg


def get_config(config_id) -> HospitalConfig:
    try:
        return HospitalConfig.objects.get(id=config_id)
    except HospitalConfig.DoesNotExist:
        raise NotFound('hospital config not found')


def list_configs() -> List[HospitalConfig]:
    return list(HospitalConfig.objects.order_by('-created_at'))


@transaction.atomic
def update_config(config_id, *, working_hours_start, working_hours_end, appointment_duration_minutes: int,
                  max_same_day_cancellation_hours: int, enable_patient_self_registration: Optional[bool] = None,
                  actor=None) -> HospitalConfig:
    start, end = _validate(working_hours_start, working_hours_end,
                           appointment_duration_minutes, max_same_day_cancellation_hours)
    try:
        cfg = HospitalConfig.objects.select_for_update().get(id=config_id)
    except HospitalConfig.DoesNotExist:
        raise NotFound('hospital config not found')

    cfg.working_hours_start = start
    cfg.working_hours_end = end
    cfg.appointment_duration_minutes = appointment_duration_minutes
    cfg.max_same_day_cancellation_hours = max_same_day_cancellation_hours
    if enable_patient_self_registration is not None:
        cfg.enable_patient_self_registration = enable_patient_self_registration
    cfg.save()
    log_action(actor=actor, action='hospital_config.update', object_type='hospital_config', object_id=cfg.id)
    return cfg


def delete_config(config_id, *, actor=None) -> None:
    deleted, _ = HospitalConfig.objects.filter(id=config_id).delete()
    if not deleted:
        raise NotFound('hospital config not found')
    log_action(actor=actor, action='hospital_config.delete', object_type='hospital_config', object_id=config_id)
