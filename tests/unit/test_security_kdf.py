"""Unit tests for the Key Derivation Function (KDF) module."""

import hashlib

from simplecrypt.security.kdf import (
    derive_key,
    evp_bytes_to_key,
    generate_password,
    generate_salt,
    kdf_params_to_dict,
    kdf_salt_from,
)


def test_generate_password_defaults():
    """Generated passwords are 256 random bytes."""
    password = generate_password()
    assert isinstance(password, bytes)
    assert len(password) == 256
    assert generate_password() != password


def test_generate_salt_is_hex_text():
    """Salts are 32 random bytes rendered as 64 hex characters."""
    salt = generate_salt()
    assert isinstance(salt, str)
    assert len(salt) == 64
    assert bytes.fromhex(salt)


def test_generate_salt_custom_length():
    assert len(generate_salt(length=4)) == 8


def test_evp_bytes_to_key_matches_openssl_construction():
    """
    EVP_BytesToKey with MD5 and no salt chains D_i = MD5(D_{i-1} || password).
    """
    d1 = hashlib.md5(b"secret").digest()
    d2 = hashlib.md5(d1 + b"secret").digest()
    d3 = hashlib.md5(d2 + b"secret").digest()

    key, iv = evp_bytes_to_key(b"secret", 24, 16)

    assert key == d1 + d2[:8]
    assert iv == d2[8:] + d3[:8]


def test_evp_bytes_to_key_string_password():
    assert evp_bytes_to_key("secret", 16, 16) == evp_bytes_to_key(b"secret", 16, 16)


def test_evp_bytes_to_key_without_iv():
    key, iv = evp_bytes_to_key(b"secret", 32, 0)
    assert len(key) == 32
    assert iv == b""


def test_kdf_salt_from_is_stable_and_sized():
    assert kdf_salt_from("abcd1234") == kdf_salt_from("abcd1234")
    assert len(kdf_salt_from("")) == 16
    assert kdf_salt_from("a") != kdf_salt_from("b")


def test_derive_key_string_and_bytes_agree():
    """Passing the same password as string or bytes yields the same key."""
    salt = kdf_salt_from("abcd1234")
    key_from_str = derive_key("password123", salt, time_cost=1, memory_cost=8)
    key_from_bytes = derive_key(b"password123", salt, time_cost=1, memory_cost=8)

    assert key_from_str == key_from_bytes
    assert len(key_from_str) == 32


def test_derive_key_custom_length():
    key = derive_key(b"pass", kdf_salt_from("s"), time_cost=1, memory_cost=8, parallelism=1, key_len=64)
    assert len(key) == 64


def test_kdf_params_to_dict():
    salt = b'\xaa' * 16
    result = kdf_params_to_dict(salt=salt, time_cost=2, memory_cost=1024, parallelism=4)

    assert result == {
        "algo": "argon2id",
        "salt": "aa" * 16,
        "time": 2,
        "memory": 1024,
        "parallelism": 4,
    }
