"""OS keystore integration using keyring for opt-in persistence of cipher key material.

A cipher is stored as one JSON secret under a service/account pair: the
password (base64-encoded), the salt and the method. Use this when digests have
to outlive the process that produced them; do not assume keyring provides
hardware-backed security on all platforms.
"""
import base64
import binascii
import json
import logging
from typing import Optional

try:
    import keyring
    from keyring.errors import PasswordDeleteError
except ImportError:
    keyring = None
    PasswordDeleteError = None

from .cipher import StringCipher
from .kdf import kdf_params_to_dict, kdf_salt_from
from .methods import get_method

logger = logging.getLogger(__name__)


def _require_keyring():
    if keyring is None:
        raise RuntimeError("keyring package is not available; install keyring to use keystore features")


def assess_keyring_backend() -> tuple[bool, str]:
    """Return (is_secure, message) describing the current keyring backend.

    Heuristics are used because the `keyring` package exposes different backends
    across platforms. If `keyring` is not available this returns (False, reason).
    """
    if keyring is None:
        return False, "keyring package is not installed"

    try:
        backend = keyring.get_keyring()
    except Exception as e:
        return False, f"failed to get keyring backend: {e}"

    name = backend.__class__.__name__
    priority = getattr(backend, "priority", None)

    insecure_indicators = ("Plaintext", "Uncrypted", "Simple", "File")
    if any(tok in name for tok in insecure_indicators):
        return False, f"insecure backend detected: {name}"

    if priority is not None and priority <= 0:
        return False, f"no suitable secure keyring backend available (priority={priority}, backend={name})"

    if "Win" in name or "Keychain" in name or "SecretService" in name or "KWallet" in name:
        return True, f"backend looks acceptable: {name} (priority={priority})"

    return True, f"unknown backend '{name}', treat with caution (priority={priority})"


def _serialize(cipher: StringCipher) -> str:
    config = cipher.config
    password = config.password
    record = {
        "method": config.method,
        "salt": config.salt,
        "encoding": config.encoding,
        "digest_encoding": config.digest_encoding,
    }
    if isinstance(password, str):
        record["password"] = password
    else:
        record["password_b64"] = base64.b64encode(password).decode("ascii")
    if get_method(config.method).authenticated:
        record["kdf"] = kdf_params_to_dict(
            kdf_salt_from(config.salt), config.time_cost, config.memory_cost, config.parallelism
        )
    return json.dumps(record)


def _deserialize(secret: str) -> dict:
    record = json.loads(secret)
    options = {
        "method": record["method"],
        "salt": record["salt"],
        "encoding": record.get("encoding"),
        "digest_encoding": record.get("digest_encoding"),
    }
    if "password_b64" in record:
        options["password"] = base64.b64decode(record["password_b64"])
    else:
        options["password"] = record["password"]
    kdf = record.get("kdf")
    if kdf:
        options["time_cost"] = kdf["time"]
        options["memory_cost"] = kdf["memory"]
        options["parallelism"] = kdf["parallelism"]
    return options


def save_cipher(service: str, account: str, cipher: StringCipher, force: bool = False) -> None:
    """Persist the key material of ``cipher`` in the OS keystore under (service, account).

    Refuses backends that look insecure (see :func:`assess_keyring_backend`)
    unless ``force`` is set.
    """
    _require_keyring()
    if not force:
        secure, msg = assess_keyring_backend()
        if not secure:
            raise RuntimeError(
                f"refusing to persist key material to OS keystore: {msg}; "
                "pass force=True to override if you understand the risk"
            )
    keyring.set_password(service, account, _serialize(cipher))
    logger.info("stored %s cipher key material for %s/%s", cipher.method(), service, account)


def load_cipher(service: str, account: str, **options) -> Optional[StringCipher]:
    """Rebuild a cipher from the OS keystore; returns None if nothing is stored.

    Keyword ``options`` override the stored settings (for example a different
    ``digest_encoding``).

    Raises:
        ValueError: the stored secret is not a record written by :func:`save_cipher`.
    """
    _require_keyring()
    secret = keyring.get_password(service, account)
    if secret is None:
        return None
    try:
        stored = _deserialize(secret)
    except (ValueError, KeyError, TypeError, binascii.Error) as e:
        raise ValueError(f"malformed cipher record in keystore for {service}/{account}") from e
    stored.update({k: v for k, v in options.items() if v is not None})
    return StringCipher(stored)


def delete_cipher(service: str, account: str) -> bool:
    """Remove stored key material; returns False if there was nothing to delete."""
    _require_keyring()
    try:
        keyring.delete_password(service, account)
    except PasswordDeleteError:
        return False
    return True
