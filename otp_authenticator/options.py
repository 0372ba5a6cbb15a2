"""
options.py — typed configuration for the OTP engine.

Two variants, one per mode:

- HotpOptions: counter-based codes (RFC 4226), no period / window.
- TotpOptions: time-based codes (RFC 6238), adds `period` (seconds per
  time slice) and `adjacent` (slices tolerated on each side when verifying).

Values are validated once, when the object is built. Both classes are
frozen, so an engine can share them by reference.
"""

from dataclasses import dataclass
from enum import Enum
import hashlib

from .exceptions import InvalidOptionsError

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # Google Authenticator default
MAX_DIGITS = 10             # 10**10 > 2**31, the truncated value never exceeds it
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
DEFAULT_ADJACENT = 1        # +/- 1 slice of clock drift
SECRET_BYTES = 20           # 160-bit secret (common practice)
MIN_SECRET_BYTES = 16       # 128-bit floor for generated secrets


class Mode(str, Enum):
    HOTP = "hotp"
    TOTP = "totp"


class Algorithm(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def parse(cls, value) -> "Algorithm":
        """Accept an Algorithm or a case-insensitive name ("sha1", "SHA256", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as e:
            raise InvalidOptionsError(f"Unsupported algorithm: {value!r}") from e

    @property
    def digestmod(self):
        """hashlib constructor usable as hmac.new(..., digestmod=...)."""
        return getattr(hashlib, self.value.lower())


def _require_int(name: str, value) -> None:
    # bool is an int subclass; True/False are never meaningful here
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidOptionsError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class HotpOptions:
    """Options for counter-based (HOTP) codes."""

    algorithm: Algorithm = Algorithm.SHA1
    digits: int = DEFAULT_DIGITS
    secret_length: int = SECRET_BYTES

    @property
    def mode(self) -> Mode:
        return Mode.HOTP

    def __post_init__(self):
        # frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))

        _require_int("digits", self.digits)
        if not 1 <= self.digits <= MAX_DIGITS:
            raise InvalidOptionsError(f"digits must be between 1 and {MAX_DIGITS}, got {self.digits}")

        _require_int("secret_length", self.secret_length)
        if self.secret_length < MIN_SECRET_BYTES:
            raise InvalidOptionsError(
                f"secret_length must be at least {MIN_SECRET_BYTES} bytes, got {self.secret_length}"
            )


@dataclass(frozen=True)
class TotpOptions(HotpOptions):
    """Options for time-based (TOTP) codes."""

    period: int = DEFAULT_TIME_STEP
    adjacent: int = DEFAULT_ADJACENT

    @property
    def mode(self) -> Mode:
        return Mode.TOTP

    def __post_init__(self):
        super().__post_init__()

        _require_int("period", self.period)
        if self.period <= 0:
            raise InvalidOptionsError(f"period must be a positive number of seconds, got {self.period}")

        _require_int("adjacent", self.adjacent)
        if self.adjacent < 0:
            raise InvalidOptionsError(f"adjacent must not be negative, got {self.adjacent}")


def make_options(mode, **kwargs) -> HotpOptions:
    """
    Build the options variant for `mode` ("hotp"/"totp" or a Mode).

    Keyword arguments that are None are dropped so the dataclass
    defaults apply; `period`/`adjacent` are ignored for HOTP.
    """
    try:
        mode = Mode(str(getattr(mode, "value", mode)).lower())
    except ValueError as e:
        raise InvalidOptionsError(f"Unsupported mode: {mode!r}") from e

    values = {k: v for k, v in kwargs.items() if v is not None}
    if mode is Mode.HOTP:
        values.pop("period", None)
        values.pop("adjacent", None)
        return HotpOptions(**values)
    return TotpOptions(**values)


DEFAULT_HOTP_OPTIONS = HotpOptions()
DEFAULT_TOTP_OPTIONS = TotpOptions()
