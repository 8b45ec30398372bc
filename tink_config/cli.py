"""CLI entrypoint for tink-config."""

from __future__ import annotations

import argparse
import pathlib
import sys

from .codec import CodecError, decode_registry_config, detect_encoding_from_path
from .config import register_config
from .constants import SUPPORTED_CONFIG_ENCODINGS
from .entry import ConfigError, RegistryConfig, build_key_type_entry, validate_entry
from .families import PrimitiveFamily, primitive_names_for
from .log import configure_logging
from .registry import get_default_registry
from .utils import json_dumps_pretty


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="tink-config", description="Primitive registry config tool")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument("--log-json", action="store_true", help="Emit log lines as JSON")
    subparsers = parser.add_subparsers(dest="command", required=True)

    families = subparsers.add_parser("families", help="List known primitive names by family")
    families.set_defaults(func=_cmd_families)

    entry = subparsers.add_parser("entry", help="Build a key type entry and print it as JSON")
    entry.add_argument("--catalogue", required=True, help="Catalogue name")
    entry.add_argument("--primitive", required=True, help="Primitive name, e.g. Aead")
    entry.add_argument("--key-proto", required=True, help="Key proto name, e.g. AesGcmKey")
    entry.add_argument("--version", type=int, default=0, help="Key manager version")
    entry.add_argument("--no-new-keys", action="store_true", help="Disallow generating new keys of this type")
    entry.set_defaults(func=_cmd_entry)

    validate_cmd = subparsers.add_parser("validate", help="Validate a registry config file")
    validate_cmd.add_argument("--in-file", required=True, help="Registry config path (.json or .cbor)")
    validate_cmd.add_argument("--encoding", choices=sorted(SUPPORTED_CONFIG_ENCODINGS))
    validate_cmd.set_defaults(func=_cmd_validate)

    register = subparsers.add_parser("register", help="Register a config into the default registry")
    register.add_argument("--in-file", required=True, help="Registry config path (.json or .cbor)")
    register.add_argument("--encoding", choices=sorted(SUPPORTED_CONFIG_ENCODINGS))
    register.set_defaults(func=_cmd_register)

    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, log_json=args.log_json)
    return args.func(args)


def _cmd_families(args: argparse.Namespace) -> int:
    listing = {family.value: primitive_names_for(family) for family in PrimitiveFamily}
    print(json_dumps_pretty(listing))
    return 0


def _cmd_entry(args: argparse.Namespace) -> int:
    if args.version < 0:
        print("--version must be non-negative", file=sys.stderr)
        return 2
    built = build_key_type_entry(
        args.catalogue,
        args.primitive,
        args.key_proto,
        key_manager_version=args.version,
        new_key_allowed=not args.no_new_keys,
    )
    try:
        validate_entry(built)
    except ConfigError as exc:
        print(f"invalid entry: {exc}", file=sys.stderr)
        return 1
    print(json_dumps_pretty(built.to_dict()))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
        _validate_all(config)
    except (CodecError, ConfigError) as exc:
        print(f"invalid: {exc}", file=sys.stderr)
        return 1
    print("valid")
    return 0


def _cmd_register(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
        _validate_all(config)
        registry = get_default_registry()
        register_config(config, registry=registry)
    except (CodecError, ConfigError) as exc:
        print(f"registration failed: {exc}", file=sys.stderr)
        return 1
    print(json_dumps_pretty(registry.snapshot()))
    return 0


def _load_config(args: argparse.Namespace) -> RegistryConfig:
    path = pathlib.Path(args.in_file)
    encoding = args.encoding or detect_encoding_from_path(path.name)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise CodecError(f"cannot read {path}: {exc}") from exc
    return decode_registry_config(raw, encoding=encoding)


def _validate_all(config: RegistryConfig) -> None:
    for index, item in enumerate(config.entries):
        try:
            validate_entry(item)
        except ConfigError as exc:
            raise ConfigError(f"entry[{index}]: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
