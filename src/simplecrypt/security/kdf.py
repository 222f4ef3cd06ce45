import hashlib
import os
from typing import Dict, Tuple

from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes


def generate_password(length: int = 256) -> bytes:
    """Return cryptographically secure random key material."""
    return os.urandom(length)


def generate_salt(length: int = 32) -> str:
    """Return a random salt rendered as a hex string."""
    return os.urandom(length).hex()


def evp_bytes_to_key(password: bytes, key_len: int, iv_len: int) -> Tuple[bytes, bytes]:
    """
    OpenSSL's legacy EVP_BytesToKey with MD5, a single round and no salt.

    This is what ``createCipher``-style APIs use to turn a password into a key
    and IV. It is weak (fast hash, no salt) and only kept so that digests stay
    interoperable with those APIs.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    derived = b""
    block = b""
    while len(derived) < key_len + iv_len:
        digest = hashes.Hash(hashes.MD5())
        digest.update(block + password)
        block = digest.finalize()
        derived += block
    return derived[:key_len], derived[key_len:key_len + iv_len]


def kdf_salt_from(salt: str) -> bytes:
    # Argon2 wants at least 8 bytes of salt; hash the text salt to a fixed 16
    return hashlib.sha256(salt.encode("utf-8")).digest()[:16]


def derive_key(
    password: bytes,
    salt: bytes,
    time_cost: int = 3,
    memory_cost: int = 65536,
    parallelism: int = 1,
    key_len: int = 32,
) -> bytes:
    """
    Derive a key from a password using Argon2id.
    Returns raw derived key bytes.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    return hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_len,
        type=Type.ID,
    )


def kdf_params_to_dict(salt: bytes, time_cost: int, memory_cost: int, parallelism: int) -> Dict:
    return {
        "algo": "argon2id",
        "salt": salt.hex(),
        "time": time_cost,
        "memory": memory_cost,
        "parallelism": parallelism,
    }
