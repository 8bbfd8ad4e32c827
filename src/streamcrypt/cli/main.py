#!/usr/bin/env python3
"""
Command-line entry point.

Usage:
  streamcrypt rc4 -f FILE -k 01 02 03 04 05
  streamcrypt keygen [-o KEYFILE]
  streamcrypt chacha -f FILE (-k HEX... | --key-file PATH) (--encrypt | --decrypt)
  streamcrypt config init [--path PATH]
  streamcrypt config install SOURCE
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from streamcrypt import __version__
from streamcrypt.file_ops import decrypt_file, encrypt_file, keygen, rc4_file
from streamcrypt.infra.config import ConfigAdapter, copy_default_config, save_config_file
from streamcrypt.infra.config.file_io import load_config_or_default
from streamcrypt.infra.logger import setup_logging
from streamcrypt.infra.paths import DEFAULT_CONFIG_FILENAME
from streamcrypt.libs.crypto import aead
from streamcrypt.libs.crypto.errors import CryptoError, FormatError
from streamcrypt.libs.crypto.keys import (
    format_hex_key,
    load_key_file,
    parse_hex_key,
    save_key_file,
)
from streamcrypt.libs.crypto.rc4 import KEY_MAX_SIZE, KEY_MIN_SIZE

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamcrypt",
        description="RC4 and ChaCha20-Poly1305 file encryption.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to a settings file"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override the configured log level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    rc4 = sub.add_parser(
        "rc4",
        help="RC4 file en/decryption (same operation for encrypt and decrypt)",
    )
    rc4.add_argument("-f", "--file", required=True, type=Path, metavar="FILE_NAME")
    rc4.add_argument(
        "-k",
        "--key",
        required=True,
        nargs="+",
        metavar="HEX_BYTE",
        help=f"En/decryption key, {KEY_MIN_SIZE}..{KEY_MAX_SIZE} hex bytes",
    )
    rc4.add_argument(
        "--chunk-size", type=int, default=None, help="Bytes processed per step"
    )

    kg = sub.add_parser(
        "keygen", help="Generate a random 256-bit ChaCha20-Poly1305 key"
    )
    kg.add_argument(
        "-o", "--output", type=Path, default=None, help="Also save the key here"
    )

    chacha = sub.add_parser("chacha", help="ChaCha20-Poly1305 file encryption")
    chacha.add_argument(
        "-f", "--file", required=True, type=Path, metavar="FILE_NAME"
    )
    key_src = chacha.add_mutually_exclusive_group()
    key_src.add_argument(
        "-k",
        "--key",
        nargs="+",
        metavar="HEX_BYTE",
        help=f"256-bit key, exactly {aead.KEY_SIZE} hex bytes",
    )
    key_src.add_argument("--key-file", type=Path, help="Read the key from a file")
    direction = chacha.add_mutually_exclusive_group(required=True)
    direction.add_argument("--encrypt", action="store_true", help="Encrypt the file")
    direction.add_argument("--decrypt", action="store_true", help="Decrypt the file")

    config = sub.add_parser("config", help="Manage settings files")
    config_sub = config.add_subparsers(dest="config_command", required=True)
    init = config_sub.add_parser("init", help="Write the sample settings file")
    init.add_argument(
        "--path",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILENAME),
        help="Destination (default: ./settings.toml)",
    )
    init.add_argument("--force", action="store_true", help="Overwrite if present")
    install = config_sub.add_parser(
        "install", help="Install a TOML/JSON file as the per-user settings"
    )
    install.add_argument("source", type=Path)

    return parser


def _resolve_chacha_key(args: argparse.Namespace, adapter: ConfigAdapter) -> bytes:
    if args.key:
        return parse_hex_key(args.key)
    if args.key_file:
        return load_key_file(args.key_file)
    key_file = adapter.get_aead_config().key_file
    if not key_file:
        raise CryptoError("No key given: use -k/--key, --key-file or aead.key_file")
    logger.debug("Using configured key file: %s", key_file)
    return load_key_file(key_file)


def _cmd_rc4(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    key = parse_hex_key(args.key)
    chunk_size = args.chunk_size or adapter.get_rc4_config().chunk_size
    rc4_file(args.file, key, chunk_size=chunk_size)
    print(f"Processed {args.file}")
    return 0


def _cmd_keygen(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    key = keygen()
    print(format_hex_key(key))
    if args.output:
        save_key_file(key, args.output)
    return 0


def _cmd_chacha(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    key = _resolve_chacha_key(args, adapter)
    if args.encrypt:
        encrypt_file(args.file, key)
        print(f"Encrypted {args.file}")
        return 0

    try:
        decrypt_file(args.file, key)
    except FormatError:
        print("Error: file too short to contain a nonce", file=sys.stderr)
        return 1
    print(f"Decrypted {args.file}")
    return 0


def _cmd_config(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    if args.config_command == "init":
        target: Path = args.path
        if target.exists() and not args.force:
            print(f"Error: {target} already exists (use --force)", file=sys.stderr)
            return 1
        copy_default_config(target)
        print(f"Wrote {target}")
        return 0

    save_config_file(args.source)
    print(f"Installed {args.source}")
    return 0


_COMMANDS = {
    "rc4": _cmd_rc4,
    "keygen": _cmd_keygen,
    "chacha": _cmd_chacha,
    "config": _cmd_config,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        adapter = ConfigAdapter(load_config_or_default(args.config))
        general = adapter.get_general_config()
        setup_logging(args.log_level or general.log_level, general.log_dir)
        return _COMMANDS[args.command](args, adapter)
    except (CryptoError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
