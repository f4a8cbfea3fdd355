import re

import pytest

from clinic_backend.core.crypto import (
    AuthenticationFailure, FieldCipher, InvalidFormat, InvalidInput,
    NONCE_SIZE, hash_value, looks_encrypted,
)
from clinic_backend.core.exceptions import ConfigurationError

KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OTHER_KEY = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"

TOKEN_RE = re.compile(r"^[0-9a-f]+:[0-9a-f]+:[0-9a-f]+$")


@pytest.fixture
def cipher():
    return FieldCipher.from_hex(KEY)


def _flip(hex_string, index):
    replacement = "0" if hex_string[index] != "0" else "1"
    return hex_string[:index] + replacement + hex_string[index + 1:]


class TestFieldCipher:

    @pytest.mark.parametrize("plaintext", [
        "Experienced cardiologist.",
        "x",
        "ünïcødé ✓ 心臓",
        "a:b:c",
    ])
    def test_round_trip(self, cipher, plaintext):
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_token_format(self, cipher):
        token = cipher.encrypt("hello")
        assert TOKEN_RE.match(token)
        nonce, tag, _ = token.split(":")
        assert len(bytes.fromhex(nonce)) == NONCE_SIZE
        assert len(bytes.fromhex(tag)) == 16

    def test_fresh_nonce_per_call(self, cipher):
        first = cipher.encrypt("same text")
        second = cipher.encrypt("same text")
        assert first.split(":")[0] != second.split(":")[0]
        assert first != second

    @pytest.mark.parametrize("value", ["", None, 42, b"bytes"])
    def test_encrypt_rejects_invalid_input(self, cipher, value):
        with pytest.raises(InvalidInput):
            cipher.encrypt(value)

    def test_flipping_any_tag_character_fails_authentication(self, cipher):
        nonce, tag, ciphertext = cipher.encrypt("sensitive").split(":")
        for index in range(len(tag)):
            tampered = f"{nonce}:{_flip(tag, index)}:{ciphertext}"
            with pytest.raises(AuthenticationFailure):
                cipher.decrypt(tampered)

    def test_tampered_ciphertext_fails_authentication(self, cipher):
        nonce, tag, ciphertext = cipher.encrypt("sensitive").split(":")
        with pytest.raises(AuthenticationFailure):
            cipher.decrypt(f"{nonce}:{tag}:{_flip(ciphertext, 0)}")

    def test_wrong_key_fails_authentication(self, cipher):
        token = cipher.encrypt("sensitive")
        with pytest.raises(AuthenticationFailure):
            FieldCipher.from_hex(OTHER_KEY).decrypt(token)

    @pytest.mark.parametrize("token", [
        "",
        "nothex",
        "aa:bb",
        "aa:bb:cc:dd",
        "zz" * 12 + ":" + "00" * 16 + ":abcd",
        "00" * 12 + "::abcd",
        "00" * 11 + ":" + "00" * 16 + ":abcd",
        "00" * 12 + ":" + "00" * 16 + ":abc",
    ])
    def test_decrypt_rejects_malformed_tokens(self, cipher, token):
        with pytest.raises(InvalidFormat):
            cipher.decrypt(token)

    def test_safe_encrypt_maps_empty_to_none(self, cipher):
        assert cipher.safe_encrypt(None) is None
        assert cipher.safe_encrypt("") is None
        assert cipher.decrypt(cipher.safe_encrypt("text")) == "text"

    def test_safe_decrypt_never_raises(self, cipher):
        assert cipher.safe_decrypt(None) == ""
        assert cipher.safe_decrypt("") == ""
        assert cipher.safe_decrypt("garbage") == ""
        token = FieldCipher.from_hex(OTHER_KEY).encrypt("other key")
        assert cipher.safe_decrypt(token) == ""
        assert cipher.safe_decrypt(cipher.encrypt("ok")) == "ok"

    def test_decrypt_if_encrypted_passes_plain_values_through(self, cipher):
        assert cipher.decrypt_if_encrypted("dr.smith@hospital.com") == "dr.smith@hospital.com"
        assert cipher.decrypt_if_encrypted(cipher.encrypt("+1234567891")) == "+1234567891"
        assert cipher.decrypt_if_encrypted(None) == ""

    def test_looks_encrypted(self, cipher):
        assert looks_encrypted(cipher.encrypt("value"))
        assert not looks_encrypted("plain text")
        assert not looks_encrypted(None)


class TestKeyConfiguration:

    @pytest.mark.parametrize("key", [None, "", "not-hex", "0011"])
    def test_invalid_keys_are_configuration_errors(self, key):
        with pytest.raises(ConfigurationError):
            FieldCipher.from_hex(key)


class TestHashValue:

    def test_normalizes_case_and_whitespace(self):
        assert hash_value("Foo ") == hash_value("foo")
        assert hash_value("  +1234 ") == hash_value("+1234")

    def test_is_sha256_hex(self):
        digest = hash_value("foo")
        assert re.match(r"^[0-9a-f]{64}$", digest)
        assert digest != "foo"

    def test_distinct_values_hash_differently(self):
        assert hash_value("foo") != hash_value("bar")

    @pytest.mark.parametrize("value", ["", None, 5])
    def test_rejects_invalid_input(self, value):
        with pytest.raises(InvalidInput):
            hash_value(value)
