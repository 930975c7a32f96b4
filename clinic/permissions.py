"""
Custom permission classes for role based access control.

The identity provider only tells us who the caller is; their role comes
from the matching :class:`clinic.models.User` row.
"""
from rest_framework.permissions import BasePermission

from clinic.authentication import subject_id
from clinic.models import User


def _role_of(request):
    sub = subject_id(request)
    if not sub:
        return None
    return User.objects.filter(pk=sub).values_list('role', flat=True).first()


class IsAdminRole(BasePermission):
    """Allow access only to staff with the ADMIN role."""
    message = 'Administrator role required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role_of(request) == User.ROLE_ADMIN
