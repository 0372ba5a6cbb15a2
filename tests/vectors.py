"""Published test vectors: RFC 4226 Appendix D and RFC 6238 Appendix B."""
import base64

from otp_authenticator import Algorithm

# reference keys (raw ASCII), one per hash in RFC 6238
RFC_SEEDS = {
    Algorithm.SHA1: b"12345678901234567890",
    Algorithm.SHA256: b"12345678901234567890123456789012",
    Algorithm.SHA512: b"1234567890123456789012345678901234567890123456789012345678901234",
}


def b32(raw: bytes) -> str:
    return base64.b32encode(raw).decode("ascii").rstrip("=")


RFC_SECRET_SHA1 = b32(RFC_SEEDS[Algorithm.SHA1])

HOTP_SHA1_6_DIGITS = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]

# (timestamp, algorithm, 8-digit code)
TOTP_8_DIGITS = [
    (59, Algorithm.SHA1, "94287082"),
    (59, Algorithm.SHA256, "46119246"),
    (59, Algorithm.SHA512, "90693936"),
    (1111111109, Algorithm.SHA1, "07081804"),
    (1111111109, Algorithm.SHA256, "68084774"),
    (1111111109, Algorithm.SHA512, "25091201"),
    (1111111111, Algorithm.SHA1, "14050471"),
    (1111111111, Algorithm.SHA256, "67062674"),
    (1111111111, Algorithm.SHA512, "99943326"),
    (1234567890, Algorithm.SHA1, "89005924"),
    (1234567890, Algorithm.SHA256, "91819424"),
    (1234567890, Algorithm.SHA512, "93441116"),
    (2000000000, Algorithm.SHA1, "69279037"),
    (2000000000, Algorithm.SHA256, "90698825"),
    (2000000000, Algorithm.SHA512, "38618901"),
    (20000000000, Algorithm.SHA1, "65353130"),
    (20000000000, Algorithm.SHA256, "77737706"),
    (20000000000, Algorithm.SHA512, "47863826"),
]
