"""Salted string encryption over ``cryptography`` ciphers.

A StringCipher appends its salt to every message, encrypts the result with the
configured method and renders the ciphertext as text (hex by default).
Decryption reverses the steps and strips the salt again.

Legacy methods (``aes192``, ``aes-256-cbc``, ...) derive key and IV from the
password with OpenSSL's EVP_BytesToKey, so the same password always yields the
same digest and digests interoperate with ``createCipher``-style tools. These
methods are unauthenticated; prefer ``aes-256-gcm`` for new data.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import IntegrityCheckFailedError
from .config import CipherConfig
from .encoding import decode_digest, encode_digest
from .kdf import derive_key, evp_bytes_to_key, generate_password, generate_salt, kdf_salt_from
from .methods import get_method

logger = logging.getLogger(__name__)

GCM_TAG_SIZE = 16


class StringCipher:
    """
    Encrypts and decrypts strings with a fixed password and salt.

    Password and salt are fixed at construction. When either one is not
    supplied it is generated from ``os.urandom``; such key material only lives
    as long as the object, so persist it (see :mod:`simplecrypt.security.keystore`)
    if digests must be decrypted later.
    """

    def __init__(self, config: Optional[Union[CipherConfig, Mapping[str, Any]]] = None, **options):
        if isinstance(config, CipherConfig):
            config = config.to_dict()
        config = CipherConfig.from_mapping(config, **options)

        generated = []
        if config.password is None:
            config = config.replace(password=generate_password())
            generated.append("password")
        if config.salt is None:
            config = config.replace(salt=generate_salt())
            generated.append("salt")
        if generated:
            logger.warning(
                "generated ephemeral %s; digests cannot be decrypted once this cipher is dropped",
                " and ".join(generated),
            )

        self._config = config
        self._method = get_method(config.method)
        password = config.password
        if isinstance(password, str):
            password = password.encode("utf-8")

        if self._method.authenticated:
            self._key = derive_key(
                password,
                kdf_salt_from(config.salt),
                time_cost=config.time_cost,
                memory_cost=config.memory_cost,
                parallelism=config.parallelism,
                key_len=self._method.key_size,
            )
            self._iv = None
        else:
            logger.info("%s is a legacy method: MD5-derived key, no authentication", self._method.name)
            self._key, self._iv = evp_bytes_to_key(password, self._method.key_size, self._method.iv_size)

    def __repr__(self):
        return (
            f"StringCipher(method={self._method.name!r}, encoding={self._config.encoding!r}, "
            f"digest_encoding={self._config.digest_encoding!r})"
        )

    @property
    def config(self) -> CipherConfig:
        return self._config

    def method(self) -> str:
        return self._config.method

    def password(self) -> Union[bytes, str]:
        """Return the password, as supplied or generated."""
        return self._config.password

    def salt(self) -> str:
        """Return the salt, as supplied or generated."""
        return self._config.salt

    # ------------------------------------------------------------------
    # Encryption
    # ------------------------------------------------------------------

    def encrypt(self, message: str) -> str:
        """
        Encrypt ``message`` and return the digest in the digest encoding.

        The salt is appended to the message before encryption, including when
        the message is empty.
        """
        plain = (message + self._config.salt).encode(self._config.encoding)

        if self._method.authenticated:
            nonce = os.urandom(self._method.iv_size)
            data = nonce + AESGCM(self._key).encrypt(nonce, plain, None)
        else:
            if self._method.padded:
                padder = padding.PKCS7(self._method.block_size).padder()
                plain = padder.update(plain) + padder.finalize()
            encryptor = self._cipher().encryptor()
            data = encryptor.update(plain) + encryptor.finalize()

        return encode_digest(data, self._config.digest_encoding)

    def decrypt(self, digest: str) -> str:
        """
        Decrypt a digest produced by :meth:`encrypt` and return the message.

        Raises:
            InvalidDigestError: ``digest`` is not valid in the digest encoding.
            IntegrityCheckFailedError: wrong password or method, tampered digest,
                or a recovered plaintext that does not end with the salt.
        """
        data = decode_digest(digest, self._config.digest_encoding)

        if self._method.authenticated:
            plain = self._open_aead(data)
        else:
            plain = self._open_legacy(data)

        try:
            text = plain.decode(self._config.encoding)
        except UnicodeDecodeError as e:
            raise IntegrityCheckFailedError(f"decrypted data is not valid {self._config.encoding}") from e
        return self._strip_salt(text)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _cipher(self) -> Cipher:
        # a fresh Cipher per call; contexts are single-use
        return Cipher(algorithms.AES(self._key), self._method.build_mode(self._iv))

    def _open_legacy(self, data: bytes) -> bytes:
        decryptor = self._cipher().decryptor()
        try:
            plain = decryptor.update(data) + decryptor.finalize()
        except ValueError as e:
            # incomplete final block
            raise IntegrityCheckFailedError(str(e)) from e

        if self._method.padded:
            unpadder = padding.PKCS7(self._method.block_size).unpadder()
            try:
                plain = unpadder.update(plain) + unpadder.finalize()
            except ValueError as e:
                raise IntegrityCheckFailedError("bad padding, wrong password or method?") from e
        return plain

    def _open_aead(self, data: bytes) -> bytes:
        nonce_size = self._method.iv_size
        if len(data) < nonce_size + GCM_TAG_SIZE:
            raise IntegrityCheckFailedError("digest too short to contain nonce and tag")
        nonce, ct = data[:nonce_size], data[nonce_size:]
        try:
            return AESGCM(self._key).decrypt(nonce, ct, None)
        except InvalidTag as e:
            raise IntegrityCheckFailedError("authentication tag mismatch") from e

    def _strip_salt(self, text: str) -> str:
        salt = self._config.salt
        if len(text) < len(salt):
            raise IntegrityCheckFailedError("decrypted text is shorter than the salt")
        if not text.endswith(salt):
            raise IntegrityCheckFailedError("decrypted text does not end with the salt")
        return text[:len(text) - len(salt)]


def create(config: Optional[Union[CipherConfig, Mapping[str, Any]]] = None, **options) -> StringCipher:
    """Build a :class:`StringCipher` from a config object, a mapping or keyword options."""
    return StringCipher(config, **options)
