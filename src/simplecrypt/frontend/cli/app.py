"""Command line frontend for simplecrypt.

Examples::

    simplecrypt encrypt "hello world" --password "correct horse" --salt abcd1234
    simplecrypt decrypt <digest> --password "correct horse" --salt abcd1234
    simplecrypt keygen --method aes-256-gcm --keyring simplecrypt alice
    simplecrypt encrypt "hello world" --keyring simplecrypt alice --copy
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from simplecrypt.core.exceptions import SimpleCryptError
from simplecrypt.security import (
    StringCipher,
    available_methods,
    generate_password,
    generate_salt,
    load_cipher,
    save_cipher,
)
from simplecrypt.security.encoding import digest_encodings
from simplecrypt.security.methods import DEFAULT_METHOD

from .clipboard import copy_to_clipboard
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _hex_bytes(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid hex: {e}")


def _add_cipher_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--method", default=None, help=f"cipher method (default: {DEFAULT_METHOD})")
    p.add_argument("--salt", default=None)
    p.add_argument("--encoding", default=None, help="plaintext encoding (default: utf8)")
    p.add_argument(
        "--digest-encoding",
        dest="digest_encoding",
        default=None,
        choices=digest_encodings(),
        help="ciphertext encoding (default: hex)",
    )
    p.add_argument("--keyring", nargs=2, metavar=("SERVICE", "ACCOUNT"), default=None)
    p.add_argument("--copy", action="store_true", help="copy the result to the clipboard")

    key = p.add_mutually_exclusive_group()
    key.add_argument("--password", default=None)
    key.add_argument("--password-hex", dest="password_hex", type=_hex_bytes, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="simplecrypt", description="Salted string encryption")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encrypt", help="encrypt a message")
    enc.add_argument("message", help="message to encrypt, '-' reads stdin")
    _add_cipher_options(enc)

    dec = sub.add_parser("decrypt", help="decrypt a digest")
    dec.add_argument("digest", help="digest to decrypt, '-' reads stdin")
    _add_cipher_options(dec)

    gen = sub.add_parser("keygen", help="generate a password and salt")
    _add_cipher_options(gen)
    gen.add_argument("--force", action="store_true", help="store even if the keyring backend looks insecure")

    sub.add_parser("methods", help="list cipher methods")
    return parser


def _options(args: argparse.Namespace) -> dict:
    return {
        "method": args.method,
        "password": args.password if args.password is not None else args.password_hex,
        "salt": args.salt,
        "encoding": args.encoding,
        "digest_encoding": args.digest_encoding,
    }


def _cipher_from_args(args: argparse.Namespace) -> StringCipher:
    options = _options(args)
    if args.keyring:
        service, account = args.keyring
        cipher = load_cipher(service, account, **options)
        if cipher is None:
            raise SimpleCryptError(f"no key material stored for {service}/{account}")
        return cipher
    if options["password"] is None or options["salt"] is None:
        raise SimpleCryptError("--password (or --password-hex) and --salt are required without --keyring")
    return StringCipher(options)


def _read_arg(value: str) -> str:
    if value == "-":
        return sys.stdin.read().rstrip("\n")
    return value


def _emit(text: str, copy: bool) -> None:
    print(text)
    if copy and not copy_to_clipboard(text):
        logger.warning("clipboard is not available, result was not copied")


def _keygen(args: argparse.Namespace) -> None:
    options = _options(args)
    if options["password"] is None:
        options["password"] = generate_password()
    if options["salt"] is None:
        options["salt"] = generate_salt()
    cipher = StringCipher(options)

    if args.keyring:
        service, account = args.keyring
        save_cipher(service, account, cipher, force=args.force)
        print(f"stored {cipher.method()} key material for {service}/{account}")
        return

    password = cipher.password()
    if isinstance(password, bytes):
        password = password.hex()
        print(f"password-hex: {password}")
    else:
        print(f"password: {password}")
    print(f"salt: {cipher.salt()}")
    print(f"method: {cipher.method()}")
    if args.copy and not copy_to_clipboard(password):
        logger.warning("clipboard is not available, password was not copied")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "methods":
            for name in available_methods():
                print(name)
        elif args.command == "keygen":
            _keygen(args)
        elif args.command == "encrypt":
            cipher = _cipher_from_args(args)
            _emit(cipher.encrypt(_read_arg(args.message)), args.copy)
        elif args.command == "decrypt":
            cipher = _cipher_from_args(args)
            _emit(cipher.decrypt(_read_arg(args.digest)), args.copy)
    except (SimpleCryptError, RuntimeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())
