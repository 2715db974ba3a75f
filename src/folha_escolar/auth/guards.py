from __future__ import annotations

from functools import wraps

from flask import g

from ..common.http import bearer_token
from .service import AuthService


def make_admin_required(auth: AuthService):
    """Decorator factory: 401 without a valid credential, 403 for a non-admin role."""

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.role = auth.verify(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return admin_required
