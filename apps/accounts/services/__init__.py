from .identity import (
    IdentityProvider,
    identity_provider,
    RoleChange,
    ROLE_ADMIN,
    ROLES,
)

__all__ = [
    'IdentityProvider',
    'identity_provider',
    'RoleChange',
    'ROLE_ADMIN',
    'ROLES',
]
