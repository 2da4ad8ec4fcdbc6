"""
Role based permission classes.

DRF runs authentication before any permission class, and a permission
failure on an unauthenticated request is reported as 401, so a caller
without a token never learns that their role would be insufficient.
"""
from rest_framework.permissions import BasePermission

from hms.models import Role


def _identity(request):
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False):
        return user
    return None


class HasRoleBase(BasePermission):
    """Admit authenticated callers whose role is in ``allowed_roles``.

    An empty ``allowed_roles`` admits any authenticated caller.
    """
    allowed_roles: frozenset = frozenset()

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = _identity(request)
        if user is None:
            return False
        return not self.allowed_roles or getattr(user, "role", None) in self.allowed_roles


def HasRole(*roles):
    """Build a permission class for the given roles.

    ``@permission_classes([HasRole(Role.DOCTOR, Role.ADMIN)])``
    """
    allowed = frozenset(Role(r) for r in roles)
    name = "HasRole_" + "_".join(sorted(r.value for r in allowed)) if allowed else "HasRole_Any"
    return type(name, (HasRoleBase,), {"allowed_roles": allowed})


def RoleForMethods(methods, *roles):
    """Restrict only the listed HTTP methods to ``roles``.

    Used where one route serves reads for everyone and a write for a
    narrower set of roles.  Combine with an authentication check.
    """
    restricted = HasRole(*roles)
    methods = frozenset(m.upper() for m in methods)

    class _RoleForMethods(BasePermission):
        def has_permission(self, request, view) -> bool:  # type: ignore[override]
            if request.method not in methods:
                return _identity(request) is not None
            return restricted().has_permission(request, view)

    _RoleForMethods.__name__ = f"{restricted.__name__}_For_{'_'.join(sorted(methods))}"
    return _RoleForMethods


class IsAdmin(HasRoleBase):
    allowed_roles = frozenset({Role.ADMIN})


class IsDoctor(HasRoleBase):
    allowed_roles = frozenset({Role.DOCTOR})


class IsNurse(HasRoleBase):
    allowed_roles = frozenset({Role.NURSE})


class IsPatient(HasRoleBase):
    allowed_roles = frozenset({Role.PATIENT})


class IsStaff(HasRoleBase):
    """Doctors, nurses and administrators."""
    allowed_roles = frozenset({Role.ADMIN, Role.DOCTOR, Role.NURSE})


IsAuthenticatedIdentity = HasRole()
