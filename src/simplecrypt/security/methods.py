"""Cipher method registry.

Method identifiers follow OpenSSL naming (``aes192``, ``aes-256-cbc``, ...) so
that configurations written for OpenSSL-backed tools keep working. Each entry
knows how to build a ``cryptography`` mode object; the cipher itself is always
constructed by ``cryptography``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from cryptography.hazmat.decrepit.ciphers import modes as decrepit_modes
from cryptography.hazmat.primitives.ciphers import algorithms, modes

from ..core.exceptions import UnsupportedMethodError


_MODES = {
    "cbc": modes.CBC,
    "ecb": modes.ECB,
    "cfb": decrepit_modes.CFB,
    "ofb": decrepit_modes.OFB,
    "ctr": modes.CTR,
}

# block modes need PKCS#7 padding, the others behave as stream ciphers
_PADDED_MODES = ("cbc", "ecb")


@dataclass(frozen=True)
class CipherMethod:
    name: str
    key_size: int
    mode: str
    iv_size: int = 16
    authenticated: bool = False

    @property
    def padded(self) -> bool:
        return self.mode in _PADDED_MODES

    @property
    def block_size(self) -> int:
        return algorithms.AES.block_size

    def build_mode(self, iv: bytes) -> modes.Mode:
        """Return the ``cryptography`` mode object for this method."""
        if self.authenticated:
            raise TypeError(f"{self.name} is an AEAD method and has no streaming mode")
        if self.mode == "ecb":
            return modes.ECB()
        return _MODES[self.mode](iv)


def _build_registry() -> Dict[str, CipherMethod]:
    registry: Dict[str, CipherMethod] = {}
    for bits in (128, 192, 256):
        for mode in _MODES:
            name = f"aes-{bits}-{mode}"
            registry[name] = CipherMethod(
                name=name,
                key_size=bits // 8,
                mode=mode,
                iv_size=0 if mode == "ecb" else 16,
            )
        # OpenSSL short aliases default to CBC
        registry[f"aes{bits}"] = registry[f"aes-{bits}-cbc"]
    registry["aes-256-gcm"] = CipherMethod(
        name="aes-256-gcm", key_size=32, mode="gcm", iv_size=12, authenticated=True
    )
    return registry


_METHODS = _build_registry()

DEFAULT_METHOD = "aes192"


def available_methods() -> List[str]:
    return sorted(_METHODS)


def get_method(name: str) -> CipherMethod:
    """Look up a method by identifier (case-insensitive)."""
    try:
        return _METHODS[name.lower()]
    except (KeyError, AttributeError):
        raise UnsupportedMethodError(name, available_methods()) from None
