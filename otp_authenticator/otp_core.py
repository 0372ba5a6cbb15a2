"""
otp_core.py — OTP engine for HOTP (RFC 4226) / TOTP (RFC 6238).

The `Authenticator` owns one raw secret and one options object and offers:
- secret management (import Base32, export Base32, generate)
- code computation for a counter (HOTP) or a Unix timestamp (TOTP)
- drift-tolerant verification with constant-time comparison
- otpauth:// provisioning URI for authenticator apps

Security notes:
- The raw secret never leaves the engine; only its Base32 form is exported.
- Generated secrets come from os.urandom (CSPRNG). os.urandom raises rather
  than falling back to a weaker source.
- An Authenticator is not thread-safe; use one instance per user/session or
  guard set_secret/create_secret with your own lock.
"""

from typing import Optional
from urllib.parse import quote, urlencode
import hmac
import logging
import os
import struct
import time

from . import base32
from .exceptions import (
    AuthenticatorError,
    InvalidSecretLengthError,
    NoSecretSetError,
    UnsupportedPlatformError,
)
from .options import MIN_SECRET_BYTES, Algorithm, HotpOptions, Mode

logger = logging.getLogger(__name__)

MAX_COUNTER = 0xFFFFFFFFFFFFFFFF


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Convert a counter to the 8-byte big-endian message RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: if `i` is not an unsigned 64-bit integer
    """
    if not 0 <= i <= MAX_COUNTER:
        raise ValueError(f"Counter must be an unsigned 64-bit integer, got {i}")
    return struct.pack(">Q", i)


def hmac_digest(algorithm: Algorithm, key: bytes, message: bytes) -> bytes:
    """Standard HMAC of `message` under `key` with the configured hash."""
    return hmac.new(key, message, algorithm.digestmod).digest()


def dynamic_truncate(digest: bytes) -> int:
    """
    Dynamic truncation per RFC 4226 §5.3.

    - offset = last_byte & 0x0F
    - read 4 bytes from offset as a big-endian integer
    - clear the most significant bit -> 31-bit unsigned value
    """
    offset = digest[-1] & 0x0F
    code = (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )
    return code


def _codes_equal(expected: str, candidate: str) -> bool:
    # compare_digest rejects non-ASCII str, so compare the UTF-8 bytes
    return hmac.compare_digest(expected.encode("utf-8"), candidate.encode("utf-8"))


class Authenticator:
    """
    HOTP/TOTP engine.

    Example:
        >>> auth = Authenticator(TotpOptions())
        >>> secret = auth.create_secret()
        >>> auth.verify(auth.code())
        True

    `data` arguments mean a counter in HOTP mode and a Unix timestamp in
    TOTP mode.
    """

    def __init__(self, options: HotpOptions, secret: Optional[str] = None):
        if struct.calcsize("Q") != 8:
            raise UnsupportedPlatformError("64-bit unsigned counters are not supported on this platform")

        self._secret: Optional[bytes] = None
        self.set_options(options)

        if secret is not None:
            self.set_secret(secret)

    # --- Options -----------------------------------------------------------
    @property
    def options(self) -> HotpOptions:
        return self._options

    def set_options(self, options: HotpOptions) -> "Authenticator":
        """Replace the options object. The current secret is kept."""
        if not isinstance(options, HotpOptions):
            raise TypeError(f"options must be HotpOptions or TotpOptions, got {type(options).__name__}")
        self._options = options
        return self

    @property
    def _is_totp(self) -> bool:
        return self._options.mode is Mode.TOTP

    # --- Secret lifecycle --------------------------------------------------
    def set_secret(self, secret: str) -> "Authenticator":
        """
        Import a secret from its Base32 representation.

        Every character is checked against the Base32 alphabet before
        decoding. The previous secret, if any, is replaced.

        Raises:
            InvalidSecretFormatError: if `secret` is not valid Base32
        """
        self._secret = base32.decode(secret)
        return self

    def get_secret(self) -> str:
        """
        Return the current secret as Base32 text (no padding).

        Raises:
            NoSecretSetError: if no secret has been set or generated
        """
        return base32.encode(self._require_secret())

    def create_secret(self, length: Optional[int] = None) -> str:
        """
        Generate a new secure-random secret and return it as Base32.

        Arguments:
            length: raw secret size in bytes (default: options.secret_length)

        Raises:
            InvalidSecretLengthError: if length < 16
        """
        length = int(length if length is not None else self._options.secret_length)

        # 128 to 512 bits is typical
        if length < MIN_SECRET_BYTES:
            raise InvalidSecretLengthError(f"Invalid secret length: {length}")

        self._secret = os.urandom(length)
        logger.debug("Generated %d-bit secret", length * 8)
        return self.get_secret()

    def _require_secret(self) -> bytes:
        if self._secret is None:
            raise NoSecretSetError("No secret set")
        return self._secret

    # --- Time slices -------------------------------------------------------
    def timeslice(self, timestamp: Optional[int] = None) -> int:
        """
        Time slice (TOTP counter) for a Unix timestamp: floor(timestamp / period).

        Arguments:
            timestamp: epoch seconds (None -> time.time())
        """
        if timestamp is None:
            timestamp = int(time.time())
        return int(timestamp) // self._period()

    def remaining(self, timestamp: Optional[int] = None) -> int:
        """Seconds until the TOTP code for `timestamp` rolls over."""
        if timestamp is None:
            timestamp = int(time.time())
        period = self._period()
        return period - (int(timestamp) % period)

    def _period(self) -> int:
        if not self._is_totp:
            raise AuthenticatorError("Time slices are only defined in TOTP mode")
        return self._options.period

    # --- Codes -------------------------------------------------------------
    def code(self, data: Optional[int] = None) -> str:
        """
        Compute the code for `data`.

        - HOTP: `data` is the counter (default 0)
        - TOTP: `data` is a Unix timestamp (default now), mapped through timeslice()

        Returns:
            str: decimal code, zero-padded to exactly options.digits chars

        Raises:
            NoSecretSetError: if no secret is set
            ValueError: if the counter is not an unsigned 64-bit integer
            TypeError: if an HOTP counter is not an int
        """
        return self._hotp(self._counter_for(data))

    def _counter_for(self, data: Optional[int]) -> int:
        if self._is_totp:
            return self.timeslice(data)
        if data is None:
            return 0
        # bool is an int subclass; floats and numeric strings are not counters
        if not isinstance(data, int) or isinstance(data, bool):
            raise TypeError(f"HOTP counter must be an int, got {type(data).__name__}")
        return data

    def _hotp(self, counter: int) -> str:
        """
        HOTP value for a raw 64-bit counter.

        Steps:
        1. Message = 8-byte counter (big-endian)
        2. HMAC(algorithm, key=secret, msg=message)
        3. Dynamic truncate -> 31-bit integer
        4. value % 10^digits, zero-padded to `digits`
        """
        key = self._require_secret()
        msg = int_to_bytes(counter)
        algorithm = self._options.algorithm
        digits = self._options.digits

        digest = hmac_digest(algorithm, key, msg)
        logger.debug("HMAC-%s(key=secret, msg=counter=%d), offset=%d",
                     algorithm.value, counter, digest[-1] & 0x0F)

        otp_val = dynamic_truncate(digest) % (10 ** digits)
        return str(otp_val).zfill(digits)

    # --- Verification ------------------------------------------------------
    def verify(self, code: str, data: Optional[int] = None) -> bool:
        """
        Check a user supplied `code`.

        - HOTP: exact match against the code for counter `data` (default 0).
          No look-ahead; counter resync is up to the caller.
        - TOTP: accept the code of any slice in
          timeslice(data) - adjacent .. timeslice(data) + adjacent.

        Comparisons use hmac.compare_digest (constant time).
        """
        if not isinstance(code, str):
            raise TypeError(f"code must be a str, got {type(code).__name__}")

        self._require_secret()

        if not self._is_totp:
            return _codes_equal(self._hotp(self._counter_for(data)), code)

        counter = self.timeslice(data)
        window = self._options.adjacent
        for offset in range(-window, window + 1):
            test_counter = counter + offset
            if test_counter < 0 or test_counter > MAX_COUNTER:
                continue
            if _codes_equal(self._hotp(test_counter), code):
                logger.debug("Code accepted at slice offset %+d", offset)
                return True
        logger.debug("Code rejected in window +/-%d around slice %d", window, counter)
        return False

    # --- Provisioning ------------------------------------------------------
    def get_uri(self, label: str, issuer: str, hotp_counter: Optional[int] = None) -> str:
        """
        Build an otpauth:// URI for authenticator apps (QR code payload).

        Format (Google Authenticator Key URI):
            otpauth://totp/{label}?secret=...&issuer=...&digits=...&algorithm=...&period=...
            otpauth://hotp/{label}?secret=...&issuer=...&digits=...&algorithm=...[&counter=...]

        Label and values are percent-encoded per RFC 3986 (space -> %20).

        Raises:
            NoSecretSetError: if no secret is set
        """
        options = self._options
        values = {
            "secret": self.get_secret(),
            "issuer": issuer,
            "digits": options.digits,
            "algorithm": options.algorithm.value,
        }

        if self._is_totp:
            values["period"] = options.period
        elif hotp_counter is not None:
            values["counter"] = int(hotp_counter)

        return "otpauth://{}/{}?{}".format(
            options.mode.value,
            quote(label, safe=""),
            urlencode(values, quote_via=quote),
        )
