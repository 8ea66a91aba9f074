"""Caller role normalization.

Role strings arrive from the session collaborator in whatever case the
backend produced ("admin", "ADMIN", ...). This is the only place where raw
role strings are compared; everything downstream works with ``Role``.
"""

from __future__ import annotations

from typing import Iterable

from order_desk.core.domain.types import Role

DEFAULT_ELEVATED_ROLES: tuple[str, ...] = ("admin",)


def normalize_role(
    raw: Role | str | None,
    elevated_roles: Iterable[str] = DEFAULT_ELEVATED_ROLES,
) -> Role:
    """Map a raw role string to ``Role``.

    Comparison is case-insensitive and ignores surrounding whitespace.
    Anything that is not an elevated role name maps to STANDARD.
    """
    if isinstance(raw, Role):
        return raw
    if not raw:
        return Role.STANDARD

    key = raw.strip().casefold()
    if key in {name.strip().casefold() for name in elevated_roles}:
        return Role.ELEVATED
    return Role.STANDARD
