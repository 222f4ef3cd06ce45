"""
Configuration model for string ciphers.

A CipherConfig is an immutable value. Missing key material is left as ``None``
here and generated by the cipher when it is constructed.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..core.exceptions import ConfigurationError
from .encoding import check_digest_encoding, check_text_encoding
from .methods import DEFAULT_METHOD, get_method


# camelCase option names -> field names
_ALIASES = {
    "digestEncoding": "digest_encoding",
    "timeCost": "time_cost",
    "memoryCost": "memory_cost",
}


@dataclass(frozen=True)
class CipherConfig:
    method: str = DEFAULT_METHOD
    password: Optional[Union[bytes, str]] = field(default=None, repr=False)
    salt: Optional[str] = None
    encoding: str = "utf8"
    digest_encoding: str = "hex"
    # Argon2id parameters, only used by authenticated methods
    time_cost: int = 3
    memory_cost: int = 65536
    parallelism: int = 1

    def __post_init__(self):
        # raises UnsupportedMethodError / UnsupportedEncodingError early
        get_method(self.method)
        check_text_encoding(self.encoding)
        object.__setattr__(self, "digest_encoding", check_digest_encoding(self.digest_encoding))

        if self.password is not None:
            if not isinstance(self.password, (bytes, bytearray, str)):
                raise ConfigurationError("password must be bytes or str")
            if len(self.password) == 0:
                # empty key material counts as missing and is generated by the cipher
                object.__setattr__(self, "password", None)
            elif isinstance(self.password, bytearray):
                object.__setattr__(self, "password", bytes(self.password))
        if self.salt is not None:
            if not isinstance(self.salt, str):
                raise ConfigurationError("salt must be a str")
            if self.salt == "":
                object.__setattr__(self, "salt", None)
        for name in ("time_cost", "memory_cost", "parallelism"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer")
        # Argon2 needs at least 8 KiB per lane
        if self.memory_cost < 8 * self.parallelism:
            raise ConfigurationError(
                f"memory_cost must be at least 8 * parallelism ({8 * self.parallelism})"
            )

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None, **overrides) -> "CipherConfig":
        """
        Build a config from a mapping of options.

        Both the snake_case field names and the camelCase option names
        (``digestEncoding``) are accepted. Keys mapped to ``None`` count as missing.
        """
        merged = {}
        for source in (options or {}, overrides):
            for key, value in source.items():
                name = _ALIASES.get(key, key)
                if name not in _FIELDS:
                    raise ConfigurationError(f"unknown cipher option: {key!r}")
                if value is not None:
                    merged[name] = value
        return cls(**merged)

    def replace(self, **changes) -> "CipherConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


_FIELDS = frozenset(f.name for f in dataclasses.fields(CipherConfig))
