"""
Bearer token authentication.

Kept apart from the views so that DRF can import it from settings during
initialisation without pulling in the view modules.
"""
from __future__ import annotations

from rest_framework import authentication

from hms.exceptions import Unauthorized
from hms.services.tokens import get_token_service


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Authenticate ``Authorization: Bearer <token>`` headers.

    No header means "anonymous"; DRF then answers 401 for views that
    require authentication because :meth:`authenticate_header` is defined.
    A present but unusable header fails immediately with 401.  On success
    ``request.user`` is the :class:`~hms.services.tokens.Identity` taken
    from the token, with no database lookup.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header:
            return None
        if header[0].lower() != self.keyword.lower().encode() or len(header) != 2:
            raise Unauthorized('invalid authorization header format')
        try:
            token = header[1].decode()
        except UnicodeError:
            raise Unauthorized('invalid authorization header format')

        identity = get_token_service().validate(token)
        return identity, token

    def authenticate_header(self, request):
        return self.keyword
