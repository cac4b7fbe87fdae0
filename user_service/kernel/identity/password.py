"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from user_service.kernel.identity.errors import CredentialVerificationError, HashingError

# Cost used when none (or zero) is configured
DEFAULT_BCRYPT_COST = 5

# bcrypt's supported work factor range
MIN_BCRYPT_COST = 4
MAX_BCRYPT_COST = 31

# bcrypt ignores everything past this many bytes of input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    Password hashing service.
    
    Hashes are self-describing (``$2b$<cost>$<salt><digest>``) with a fresh
    salt per call, so verification needs nothing but the stored value.
    """
    
    def __init__(self, rounds: int | None = None):
        self.rounds = rounds or DEFAULT_BCRYPT_COST
    
    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.
        
        Args:
            password: Plain text password
            
        Returns:
            Hashed password string
            
        Raises:
            HashingError: If the password exceeds 72 bytes or the cost
                factor is outside bcrypt's range
        """
        pwd_bytes = password.encode("utf-8")
        if len(pwd_bytes) > MAX_PASSWORD_BYTES:
            raise HashingError(
                f"password exceeds {MAX_PASSWORD_BYTES} bytes"
            )
        if not MIN_BCRYPT_COST <= self.rounds <= MAX_BCRYPT_COST:
            raise HashingError(
                f"cost factor {self.rounds} outside "
                f"{MIN_BCRYPT_COST}-{MAX_BCRYPT_COST}"
            )
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            hashed = bcrypt.hashpw(pwd_bytes, salt)
        except ValueError as e:
            raise HashingError(str(e)) from e
        return hashed.decode("utf-8")
    
    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash in constant time.
        
        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored hashed password
            
        Returns:
            True if password matches, False otherwise
            
        Raises:
            CredentialVerificationError: If the stored hash is corrupt or
                not a bcrypt hash
        """
        pwd_bytes = plain_password.encode("utf-8")
        if len(pwd_bytes) > MAX_PASSWORD_BYTES:
            # hash() never accepts such input, so nothing stored can match it
            return False
        try:
            return bcrypt.checkpw(pwd_bytes, hashed_password.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise CredentialVerificationError("stored password hash is invalid") from e


# Convenience functions
def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password."""
    return PasswordHasher(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password."""
    return PasswordHasher().verify(plain_password, hashed_password)
