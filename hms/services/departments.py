"""Department management.  Deletion is a soft delete through ``is_active``."""
from typing import List, Optional, Tuple

from django.db import transaction

from hms.exceptions import InvalidInput, InvalidState, NotFound
from hms.models import Department
from hms.services.audit import log_action
from hms.services.text import strip_tags

MAX_PAGE_SIZE = 100


def _validate_name(name: str) -> str:
    name = (name or '').strip()
    if not name:
        raise InvalidInput('name cannot be empty')
    if len(name) > 255:
        raise InvalidInput('name cannot exceed 255 characters')
    if len(name) < 2:
        raise InvalidInput('name must be at least 2 characters long')
    return name


def _validate_description(description: Optional[str]) -> str:
    description = description or ''
    if len(description) > 500:
        raise InvalidInput('description cannot exceed 500 characters')
    return strip_tags(description)


def _load(dept_id) -> Department:
    try:
        return Department.objects.get(id=dept_id)
    except Department.DoesNotExist:
        raise NotFound('department not found')


def create_department(name: str, description: str = '', *, actor=None) -> Department:
    dept = Department.objects.create(
        name=_validate_name(name),
        description=_validate_description(description),
        is_active=True,
    )
    log_action(actor=actor, action='department.create', object_type='department', object_id=dept.id)
    return dept


def get_department(dept_id) -> Department:
    dept = _load(dept_id)
    if not dept.is_active:
        raise NotFound('department is inactive')
    return dept


def list_departments(page: int = 1, page_size: int = 10) -> Tuple[List[Department], int]:
    if page < 1:
        raise InvalidInput('page must be greater than 0')
    if page_size < 1:
        raise InvalidInput('page_size must be greater than 0')
    if page_size > MAX_PAGE_SIZE:
        raise InvalidInput('page_size cannot exceed 100')
    qs = Department.objects.filter(is_active=True).order_by('name', 'created_at')
    offset = (page - 1) * page_size
    return list(qs[offset:offset + page_size]), qs.count()


@transaction.atomic
def update_department(dept_id, *, name: Optional[str] = None, description: Optional[str] = None,
                      is_active: Optional[bool] = None, actor=None) -> Department:
    if name is None and description is None and is_active is None:
        raise InvalidInput('at least one field must be provided for update')
    if name is not None:
        name = _validate_name(name)
    if description is not None:
        description = _validate_description(description)

    try:
        dept = Department.objects.select_for_update().get(id=dept_id)
    except Department.DoesNotExist:
        raise NotFound('department not found')
    if not dept.is_active:
        raise InvalidState('cannot update an inactive department')

    if name is not None:
        dept.name = name
    if description is not None:
        dept.description = description
    if is_active is not None:
        dept.is_active = is_active
    dept.save()
    log_action(actor=actor, action='department.update', object_type='department', object_id=dept.id)
    return dept


@transaction.atomic
def delete_department(dept_id, *, actor=None) -> None:
    try:
        dept = Department.objects.select_for_update().get(id=dept_id)
    except Department.DoesNotExist:
        raise NotFound('department not found')
    if not dept.is_active:
        raise InvalidState('department is already deleted')
    dept.is_active = False
    dept.save(update_fields=['is_active', 'updated_at'])
    log_action(actor=actor, action='department.delete', object_type='department', object_id=dept.id)
