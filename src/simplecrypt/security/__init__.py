"""Security package of simplecrypt: salted string encryption over ``cryptography``.

This package provides:
- StringCipher: encrypt/decrypt strings to text digests with a fixed password and salt
- a registry of OpenSSL-style method identifiers (aes192, aes-256-cbc, aes-256-gcm, ...)
- legacy EVP_BytesToKey and Argon2id key derivation
- opt-in persistence of key material in the OS keystore

Quick use::

    from simplecrypt.security import create

    cipher = create(password="correct horse", salt="abcd1234")
    digest = cipher.encrypt("hello world")
    assert cipher.decrypt(digest) == "hello world"
"""

from .config import CipherConfig
from .cipher import StringCipher, create
from .methods import available_methods, get_method
from .kdf import evp_bytes_to_key, derive_key, generate_password, generate_salt
from .keystore import save_cipher, load_cipher, delete_cipher, assess_keyring_backend

__all__ = [
    "CipherConfig",
    "StringCipher",
    "create",
    "available_methods",
    "get_method",
    "evp_bytes_to_key",
    "derive_key",
    "generate_password",
    "generate_salt",
    "save_cipher",
    "load_cipher",
    "delete_cipher",
    "assess_keyring_backend",
]
