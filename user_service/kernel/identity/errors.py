"""
Exceptions raised by the identity core.

Business outcomes (phone number taken, unknown phone number, wrong password)
are not exceptions; see ``outcomes``.
"""


class IdentityError(Exception):
    """Base class for identity core failures."""


class HashingError(IdentityError):
    """A password could not be hashed (input too long, bad cost factor)."""


class CredentialVerificationError(IdentityError):
    """A stored hash could not be checked (corrupt value, unknown algorithm)."""


class SigningError(IdentityError):
    """A token could not be produced."""


class KeyMaterialError(SigningError):
    """RSA key material could not be read or parsed."""


class TokenInvalidError(IdentityError):
    """Token is malformed, wrongly signed, uses a foreign algorithm, or expired."""


class NotFoundError(IdentityError):
    """The store holds no record for the requested key."""
