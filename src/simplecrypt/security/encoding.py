"""Text renderings for ciphertext (digest encodings) and plaintext codec checks."""

from __future__ import annotations

import base64
import binascii
import codecs
from typing import Callable, Dict, Tuple

from ..core.exceptions import InvalidDigestError, UnsupportedEncodingError


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)


_CODECS: Dict[str, Tuple[Callable[[bytes], str], Callable[[str], bytes]]] = {
    "hex": (
        lambda data: binascii.hexlify(data).decode("ascii"),
        binascii.unhexlify,
    ),
    "base64": (
        lambda data: base64.b64encode(data).decode("ascii"),
        lambda text: base64.b64decode(text, validate=True),
    ),
    "base64url": (_b64url_encode, _b64url_decode),
    "latin1": (
        lambda data: data.decode("latin-1"),
        lambda text: text.encode("latin-1"),
    ),
}
_CODECS["binary"] = _CODECS["latin1"]


def digest_encodings():
    return sorted(_CODECS)


def check_digest_encoding(name: str) -> str:
    """Return the normalized digest encoding name or raise UnsupportedEncodingError."""
    normalized = name.lower() if isinstance(name, str) else name
    if normalized not in _CODECS:
        raise UnsupportedEncodingError(
            f"unsupported digest encoding: {name!r} (available: {', '.join(digest_encodings())})"
        )
    return normalized


def check_text_encoding(name: str) -> str:
    """Validate a plaintext codec name against the codec registry."""
    try:
        codecs.lookup(name)
    except (LookupError, TypeError) as e:
        raise UnsupportedEncodingError(f"unsupported text encoding: {name!r}") from e
    return name


def encode_digest(data: bytes, encoding: str) -> str:
    encoder, _ = _CODECS[check_digest_encoding(encoding)]
    return encoder(data)


def decode_digest(text: str, encoding: str) -> bytes:
    """Turn a digest string back into ciphertext bytes.

    Raises:
        InvalidDigestError: if ``text`` is not valid in ``encoding``.
    """
    _, decoder = _CODECS[check_digest_encoding(encoding)]
    try:
        return decoder(text)
    except (binascii.Error, ValueError, TypeError) as e:
        raise InvalidDigestError(f"digest is not valid {encoding}: {e}") from e
