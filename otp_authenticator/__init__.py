"""
otp_authenticator package
=========================

Generate and verify one-time codes (HOTP/TOTP) per RFC 4226 & RFC 6238,
compatible with Google Authenticator style apps.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC(key=secret, msg=counter)) mod 10^digits
  → counter is an explicit, caller-managed 64-bit value.

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(timestamp / period)
  → default period = 30 seconds, 6 digits, SHA1.
  → verification accepts +/- `adjacent` slices of clock drift.

- Dynamic Truncation:
  take 4 bytes of the HMAC at offset (last byte & 0x0F), clear the sign bit.

──────────────────────────────────────────────
Usage
──────────────────────────────────────────────
1. Provisioning a user
        from otp_authenticator import Authenticator, TotpOptions
        auth = Authenticator(TotpOptions())
        secret = auth.create_secret()          # store this (Base32) yourself
        uri = auth.get_uri("alice@example.com", "MyService")
        # Render `uri` as a QR code with the library of your choice.

2. Verifying a login
        auth = Authenticator(TotpOptions(), secret=stored_secret)
        if auth.verify(user_input):
            login_ok = True

3. Counter-based tokens
        from otp_authenticator import HotpOptions
        auth = Authenticator(HotpOptions(digits=8), secret=stored_secret)
        auth.verify(user_input, counter)       # exact match, no look-ahead

The package does not store secrets, serve codes over a network or render
QR codes; those belong to the embedding application.
"""
import logging

from .exceptions import (
    AuthenticatorError,
    InvalidOptionsError,
    InvalidSecretFormatError,
    InvalidSecretLengthError,
    NoSecretSetError,
    UnsupportedPlatformError,
)
from .options import (
    DEFAULT_HOTP_OPTIONS,
    DEFAULT_TOTP_OPTIONS,
    Algorithm,
    HotpOptions,
    Mode,
    TotpOptions,
    make_options,
)
from .otp_core import Authenticator

__version__ = "1.0.0"

__all__ = [
    "Authenticator",
    "Algorithm",
    "Mode",
    "HotpOptions",
    "TotpOptions",
    "make_options",
    "DEFAULT_HOTP_OPTIONS",
    "DEFAULT_TOTP_OPTIONS",
    "AuthenticatorError",
    "InvalidOptionsError",
    "InvalidSecretFormatError",
    "InvalidSecretLengthError",
    "NoSecretSetError",
    "UnsupportedPlatformError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
