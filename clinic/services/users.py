"""
Staff users.

User rows mirror identities held by the hosted identity provider; the
primary key is the provider's subject id.  Rows are created by the
``register_staff`` and ``seed_data`` commands (or the Django admin) and
are never deleted through the API.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from clinic.exceptions import ConflictError, DoctorNotFound
from clinic.models import User

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('email', 'first_name', 'last_name')


def format_user(user: User) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'role': user.role,
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }


def format_doctor(user: User) -> dict:
    return {
        'id': user.id,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'email': user.email,
    }


def list_users(role: Optional[str] = None):
    qs = User.objects.all()
    if role:
        qs = qs.filter(role=role)
    return qs.order_by('last_name', 'first_name')


def list_doctors() -> list[dict]:
    return [format_doctor(u) for u in list_users(User.ROLE_DOCTOR)]


def get_user(user_id: str) -> User:
    user = User.objects.filter(pk=user_id).first()
    if not user:
        raise NotFound('User not found')
    return user


def get_current_user(subject_id) -> Optional[User]:
    """Map the authenticated subject onto its staff record, if any."""
    if not subject_id:
        return None
    return User.objects.filter(pk=str(subject_id)).first()


def resolve_doctor(doctor_id: str) -> User:
    doctor = User.objects.filter(pk=doctor_id).first()
    if not doctor or not doctor.is_doctor:
        raise DoctorNotFound()
    return doctor


def create_user(*, id: str, email: str, first_name: str, last_name: str, role: str) -> User:
    if User.objects.filter(pk=id).exists():
        raise ConflictError('User already exists')
    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError('Email already in use')
    try:
        with transaction.atomic():
            user = User.objects.create(
                id=id, email=email, first_name=first_name, last_name=last_name, role=role,
            )
    except IntegrityError as exc:
        raise ConflictError('Email already in use') from exc
    logger.info("Created user %s (%s)", user.id, user.role)
    return user


def update_user(user_id: str, **fields) -> User:
    """Update profile fields and, when given, the role.

    Only the staff management commands reach this; no API route changes a role.
    """
    user = get_user(user_id)
    changed = []
    for name in PROFILE_FIELDS + ('role',):
        value = fields.get(name)
        if value is not None and getattr(user, name) != value:
            setattr(user, name, value)
            changed.append(name)
    if 'email' in changed and User.objects.filter(email__iexact=user.email).exclude(pk=user.pk).exists():
        raise ConflictError('Email already in use')
    if changed:
        user.save(update_fields=changed + ['updated_at'])
        logger.info("Updated user %s: %s", user.id, ', '.join(changed))
    return user


def ensure_user(*, id: str, email: str, first_name: str, last_name: str, role: str) -> tuple[User, bool]:
    """Create the user or bring an existing one in line (idempotent)."""
    if User.objects.filter(pk=id).exists():
        return update_user(id, email=email, first_name=first_name, last_name=last_name, role=role), False
    return create_user(id=id, email=email, first_name=first_name, last_name=last_name, role=role), True
