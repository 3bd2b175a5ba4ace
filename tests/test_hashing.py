"""
Challenge hashing tests: encoding detection and pinned digests.
"""
import pytest
from eth_utils import keccak

from dappauth import decode_challenge, hash_personal_message, is_hex_challenge
from dappauth.constants import PERSONAL_MESSAGE_PREFIX


FOO_DIGEST = "76b2e96714d3b5e6eb1d1c509265430b907b44f72b2a22b06fcd4d96372b8565"
FFFF_HEX_DIGEST = "13a6aa3102b2d639f36804a2d7c31469618fd7a7907c658a7b2aa91a06e31e47"
FFFF_UTF8_DIGEST = "247aefb5d2e5b17fca61f786c779f7388485460c13e51308f88b2ff84ffa6851"


class TestHashPersonalMessage:

    def test_utf8_challenge_digest_is_pinned(self):
        assert hash_personal_message("foo").hex() == FOO_DIGEST

    def test_repeated_calls_are_identical(self):
        assert hash_personal_message("foo") == hash_personal_message("foo")

    def test_hex_challenge_is_decoded_as_raw_bytes(self):
        assert hash_personal_message("0xffff").hex() == FFFF_HEX_DIGEST

    def test_hex_and_utf8_readings_differ(self):
        as_text = keccak(PERSONAL_MESSAGE_PREFIX + b"6" + b"0xffff")

        assert as_text.hex() == FFFF_UTF8_DIGEST
        assert hash_personal_message("0xffff") != as_text

    def test_digest_layout(self):
        expected = keccak(PERSONAL_MESSAGE_PREFIX + b"2" + b"\xff\xff")
        assert hash_personal_message("0xffff") == expected

    def test_digest_is_32_bytes(self):
        assert len(hash_personal_message("héllo wörld")) == 32

    def test_non_str_challenge_raises(self):
        with pytest.raises(TypeError):
            hash_personal_message(b"foo")


class TestDecodeChallenge:

    @pytest.mark.parametrize(
        "challenge, expected",
        [
            ("0xffff", b"\xff\xff"),
            ("0xDEADbeef", b"\xde\xad\xbe\xef"),
            ("0x", b""),
            ("foo", b"foo"),
            ("0xfff", b"0xfff"),          # odd digit count
            ("0xzz", b"0xzz"),            # non-hex characters
            ("0XFFFF", b"0XFFFF"),        # uppercase prefix
            ("ffff", b"ffff"),            # no prefix
            (" 0xffff", b" 0xffff"),
            ("ünïcode", "ünïcode".encode("utf-8")),
        ],
    )
    def test_decoding(self, challenge, expected):
        assert decode_challenge(challenge) == expected

    @pytest.mark.parametrize("challenge", ["0x", "0x00", "0xffff", "0xAbCd"])
    def test_hex_detection_positive(self, challenge):
        assert is_hex_challenge(challenge)

    @pytest.mark.parametrize("challenge", ["", "0", "0xf", "0xfffg", "0X00", "foo", "0xffff\n"])
    def test_hex_detection_negative(self, challenge):
        assert not is_hex_challenge(challenge)
