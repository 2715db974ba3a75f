from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role carried inside the signed credential."""

    ADMIN = "admin"
    VIEWER = "viewer"
