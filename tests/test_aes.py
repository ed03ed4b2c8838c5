import base64
import hashlib

import pytest

from merchlib.util.aes import (
    aes_decrypt,
    aes_decrypt_pkcs5,
    aes_decrypt_pkcs7,
    aes_decrypt_pkcs7_base64,
    aes_decrypt_simple,
    aes_encrypt,
    aes_encrypt_pkcs5,
    aes_encrypt_pkcs7,
    aes_encrypt_pkcs7_base64,
    aes_encrypt_simple,
    pkcs5_padding,
    pkcs5_unpadding,
    pkcs7_padding,
    pkcs7_unpadding,
)

KEY = hashlib.md5(b"secret").digest()
KEY_256 = hashlib.sha256(b"secret").digest()
IV = bytes(range(16))


def test_pkcs5_padding_bytes():
    assert pkcs5_padding(b"abc", 8) == b"abc" + b"\x05" * 5


def test_padding_adds_full_block_when_aligned():
    padded = pkcs7_padding(b"x" * 16, 16)
    assert len(padded) == 32
    assert padded[16:] == bytes([16]) * 16


@pytest.mark.parametrize("size", [0, 1, 15, 16, 17, 40])
def test_padding_round_trip(size):
    data = b"q" * size
    padded5 = pkcs5_padding(data, 16)
    padded7 = pkcs7_padding(data, 16)
    assert len(padded5) % 16 == 0 and len(padded5) > size
    assert pkcs5_unpadding(padded5) == data
    assert pkcs7_unpadding(padded7) == data


def test_pkcs5_unpadding_reports_bad_length():
    assert pkcs5_unpadding(b"\x01\x02\x09") == b"unpadding error"


def test_pkcs7_unpadding_bad_length_raises():
    with pytest.raises(ValueError):
        pkcs7_unpadding(b"\x09")


def test_unpadding_empty_raises():
    with pytest.raises(ValueError):
        pkcs5_unpadding(b"")
    with pytest.raises(ValueError):
        pkcs7_unpadding(b"")


@pytest.mark.parametrize("message", [b"", b"hello", "商户订单".encode(), b"z" * 64])
def test_pkcs7_round_trip(message):
    encrypted = aes_encrypt_pkcs7(message, KEY, IV)
    assert len(encrypted) % 16 == 0
    assert encrypted != pkcs7_padding(message, 16)
    assert aes_decrypt_pkcs7(encrypted, KEY, IV) == message


def test_pkcs5_round_trip_with_256_bit_key():
    encrypted = aes_encrypt_pkcs5(b"payload", KEY_256, IV)
    assert aes_decrypt_pkcs5(encrypted, KEY_256, IV) == b"payload"


def test_base64_round_trip():
    encoded = aes_encrypt_pkcs7_base64(b"payload", KEY, IV)
    raw = base64.b64decode(encoded, validate=True)
    assert raw == aes_encrypt_pkcs7(b"payload", KEY, IV)
    assert aes_decrypt_pkcs7_base64(encoded, KEY, IV) == b"payload"


def test_base64_decrypt_rejects_garbage():
    with pytest.raises(ValueError):
        aes_decrypt_pkcs7_base64(b"!!not base64!!", KEY, IV)


def test_generic_with_custom_padding():
    encrypted = aes_encrypt(b"abc", KEY, IV, pkcs5_padding)
    assert aes_decrypt(encrypted, KEY, IV, pkcs7_unpadding) == b"abc"


def test_invalid_key_length_raises():
    with pytest.raises(ValueError):
        aes_encrypt_pkcs7(b"abc", b"short", IV)


def test_ciphertext_not_full_blocks_raises():
    with pytest.raises(ValueError):
        aes_decrypt_pkcs7(b"\x00" * 10, KEY, IV)


def test_simple_helpers_both_decrypt():
    key_text = hashlib.md5(b"secret").hexdigest()[:16]
    iv_text = hashlib.md5(b"token").hexdigest()[:16]
    encrypted = aes_encrypt_pkcs5(b"payload", key_text.encode(), iv_text.encode())
    assert aes_decrypt_simple(encrypted, key_text, iv_text) == b"payload"
    assert aes_encrypt_simple(encrypted, key_text, iv_text) == b"payload"