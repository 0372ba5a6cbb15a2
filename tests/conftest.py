import pytest

from otp_authenticator import Authenticator, HotpOptions, TotpOptions

from .vectors import RFC_SECRET_SHA1


@pytest.fixture
def hotp_auth():
    return Authenticator(HotpOptions(), secret=RFC_SECRET_SHA1)


@pytest.fixture
def totp_auth():
    return Authenticator(TotpOptions(), secret=RFC_SECRET_SHA1)


@pytest.fixture
def fresh_auth():
    return Authenticator(TotpOptions())
