"""
Bearer-token authentication against the hosted identity provider.

The provider issues signed JWTs; we only verify the signature (JWKS in
production, a shared key in development), the expiry and optionally the
issuer/audience, then expose the ``sub`` claim as the request user's id.
Credentials are never inspected beyond that; mapping the subject to a
staff record and its role happens in ``clinic.services.users``.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication


class IdentityProviderAuthentication(JWTStatelessUserAuthentication):
    """Stateless JWT authentication yielding a ``TokenUser``.

    Provider tokens carry no ``token_type`` claim, so ``SIMPLE_JWT`` is
    configured to validate them as ``UntypedToken``.
    """

    www_authenticate_realm = 'mediconnect'


def subject_id(request):
    """Return the authenticated subject id, or ``None``."""
    user = getattr(request, 'user', None)
    if not (user and user.is_authenticated):
        return None
    return str(user.id)
