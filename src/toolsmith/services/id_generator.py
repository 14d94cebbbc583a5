"""Prefixed ID and opaque token generation."""

import secrets
import uuid


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique ID, e.g. ``"org_a1b2c3d4e5f6a7b8"``."""
    short_uuid = uuid.uuid4().hex[:16]
    return f"{prefix}{short_uuid}"


def generate_token() -> str:
    """Opaque URL-safe token for invitations and password resets."""
    return secrets.token_urlsafe(32)
