"""
base32.py — Base32 codec (RFC 4648 / RFC 3548) for OTP secrets.

Authenticator apps exchange secrets as uppercase Base32 without padding,
e.g. "JBSWY3DPEHPK3PXP". Decoding accepts text with or without the
trailing '=' padding.
"""

import base64
import binascii
import re

from .exceptions import InvalidSecretFormatError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

_BASE32_RE = re.compile(r"[A-Z2-7]+=*")


def is_base32(text: str) -> bool:
    """True if `text` is non-empty and uses only the Base32 alphabet (+ trailing padding)."""
    return isinstance(text, str) and _BASE32_RE.fullmatch(text) is not None


def encode(data: bytes) -> str:
    """
    Encode raw bytes to Base32 text.

    - base64.b32encode pads to a multiple of 8 chars with '=';
      the padding is stripped since authenticator apps do not expect it.
    """
    return base64.b32encode(data).decode("ascii").rstrip(PAD)


def decode(text: str) -> bytes:
    """
    Decode Base32 text to raw bytes.

    Arguments:
        text: Base32 text (uppercase, padding optional)

    Raises:
        InvalidSecretFormatError: if a character is outside the alphabet,
            or the length cannot be a Base32 encoding (e.g. 1, 3 or 6
            significant chars in the last block)
    """
    if not is_base32(text):
        raise InvalidSecretFormatError("Invalid secret phrase")

    stripped = text.rstrip(PAD)
    missing_padding = len(stripped) % 8
    if missing_padding:
        stripped += PAD * (8 - missing_padding)
    try:
        return base64.b32decode(stripped)
    except binascii.Error as e:
        raise InvalidSecretFormatError("Invalid secret phrase") from e
