import os

import pytest

from otp_authenticator import InvalidSecretFormatError, base32


class TestBase32:

    @pytest.mark.parametrize("text", ["JBSWY3DPEHPK3PXP", "MFRGG===", "A", "234567"])
    def test_is_base32(self, text):
        assert base32.is_base32(text)

    @pytest.mark.parametrize("text", ["", "not-base32!!", "jbswy3dp", "ABC0", "ABC8", "AB=C", "==", "JBSWY3DP\n", "JBSWY3DP\nA", None, b"MFRGG"])
    def test_is_not_base32(self, text):
        assert not base32.is_base32(text)

    def test_alphabet(self):
        assert len(base32.ALPHABET) == 32
        assert all(base32.is_base32(c) for c in base32.ALPHABET)

    def test_encode_rfc4648(self):
        # RFC 4648 §10
        assert base32.encode(b"") == ""
        assert base32.encode(b"f") == "MY"
        assert base32.encode(b"foobar") == "MZXW6YTBOI"

    def test_decode_with_and_without_padding(self):
        assert base32.decode("MZXW6YQ=") == b"foob"
        assert base32.decode("MZXW6YQ") == b"foob"
        assert base32.decode("MZXW6YTB") == b"fooba"

    def test_round_trip(self):
        for n in (1, 16, 20, 33, 64):
            raw = os.urandom(n)
            assert base32.decode(base32.encode(raw)) == raw

    @pytest.mark.parametrize("text", ["not-base32!!", "mzxw6yq", "", "A", "ABC"])
    def test_decode_rejects(self, text):
        with pytest.raises(InvalidSecretFormatError):
            base32.decode(text)
