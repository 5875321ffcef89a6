"""
Caller authentication and role checks for the catalog routes.

The identity provider issues signed JWTs; this module only verifies
them and reads the caller's roles. Requests without an ``Authorization``
header are treated as an anonymous caller holding no roles, so every
role-gated route answers 403 for them. A header that is present but
unusable (wrong scheme, bad signature, expired) is a 401.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional

import jwt
from fastapi import Depends, HTTPException, Request, status

from .config import Settings

logger = logging.getLogger(__name__)

_ROLE_PREFIX = "ROLE_"


class Role(str, enum.Enum):
    LIBRARIAN = "LIBRARIAN"
    USER = "USER"

    @classmethod
    def parse(cls, raw: Any) -> Optional["Role"]:
        """Map a token role string (``ROLE_LIBRARIAN``, ``user``...) to a Role."""
        if not isinstance(raw, str):
            return None
        name = raw.strip().upper()
        if name.startswith(_ROLE_PREFIX):
            name = name[len(_ROLE_PREFIX):]
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Principal:
    """Authenticated caller identity."""

    subject: str
    roles: FrozenSet[Role] = field(default_factory=frozenset)

    def has_any_role(self, allowed: Iterable[Role]) -> bool:
        return not self.roles.isdisjoint(allowed)


ANONYMOUS = Principal(subject="")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _lookup_claim(payload: Dict[str, Any], name: str) -> Any:
    value: Any = payload
    for part in name.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


def extract_roles(payload: Dict[str, Any], claim_names: List[str]) -> FrozenSet[Role]:
    """Read roles from the first configured claim present in ``payload``.

    A claim may hold a list of role strings or a single string. Role
    names the gateway does not know are dropped.
    """
    for claim_name in claim_names:
        raw = _lookup_claim(payload, claim_name)
        if raw is None:
            continue
        values = [raw] if isinstance(raw, str) else raw
        if not isinstance(values, (list, tuple)):
            logger.debug("Ignoring roles claim %r of type %s", claim_name, type(raw).__name__)
            return frozenset()
        roles = (Role.parse(v) for v in values)
        return frozenset(r for r in roles if r is not None)
    return frozenset()


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature and expiry of ``token`` and return its claims.

    Raises ``HTTPException`` (401) when the token cannot be trusted.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"], "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired bearer token")
        raise _unauthorized("Token has expired") from None
    except jwt.InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise _unauthorized(f"Could not validate credentials: {e}") from e


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_principal(
    request: Request, settings: Settings = Depends(get_settings)
) -> Principal:
    """Resolve the caller from the ``Authorization`` header."""
    authorization = request.headers.get("Authorization")
    if not authorization:
        return ANONYMOUS

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid authentication format")

    payload = decode_token(parts[1], settings)
    subject = payload.get("sub")
    roles = extract_roles(payload, settings.JWT_ROLE_CLAIM_NAMES)
    return Principal(subject=subject if isinstance(subject, str) else "", roles=roles)


def require_roles(operation: str, allowed: FrozenSet[Role]) -> Callable[..., Principal]:
    """Build a dependency that lets through callers holding any of ``allowed``."""

    def check(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not principal.has_any_role(allowed):
            logger.warning(
                "Access denied to %s for subject=%r roles=%s",
                operation,
                principal.subject,
                sorted(r.value for r in principal.roles),
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acceso denegado")
        return principal

    return check
