class AuthenticatorError(Exception):
    """Base error for the OTP engine."""
    pass

class NoSecretSetError(AuthenticatorError):
    """A secret-dependent operation was called before a secret exists."""
    pass

class InvalidSecretFormatError(AuthenticatorError, ValueError):
    """Secret text contains characters outside the Base32 alphabet."""
    pass

class InvalidSecretLengthError(AuthenticatorError, ValueError):
    """Requested secret is shorter than 16 bytes."""
    pass

class InvalidOptionsError(AuthenticatorError, ValueError):
    """Options failed validation."""
    pass

class UnsupportedPlatformError(AuthenticatorError):
    """Platform cannot represent unsigned 64-bit counters."""
    pass
