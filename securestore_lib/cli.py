"""Command line interface for securestore.

Provides argument parsing and small wrappers that run one store operation
per invocation against the configured backend. Settings come from a YAML
file (``data/config/store_config.yml`` by default):

    log_level: INFO
    backend: file            # or memory
    data_dir: data/store
    chunk_size: 2048
    max_value_size: 2048
    compression_quality: 4
    encrypt: false           # password from SECURESTORE_PASSWORD or prompt
"""
from __future__ import annotations
import argparse
import asyncio
import json
import os
import sys
from getpass import getpass
from pathlib import Path
from typing import Any, Iterable, Optional

from securestore_lib.compression import BrotliCodec
from securestore_lib.config import StoreConfig, load_settings
from securestore_lib.errors import SecureStoreError
from securestore_lib.logging_config import DEFAULT_CONFIG_PATH, configure_logging
from securestore_lib.storage import create_backend
from securestore_lib.store import SecureItemStore
from securestore_lib.types import Found, StorageType

PASSWORD_ENV = "SECURESTORE_PASSWORD"


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="securestore", description="Chunked, compressed key-value item store")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML settings file")
    p.add_argument("--data-dir", default=None, help="Override the file backend data directory")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="command", required=True)

    p_set = sub.add_parser("set", help="Store a value (parsed as JSON when possible)")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument("--uncompressed", action="store_true", help="Store without compression")

    p_get = sub.add_parser("get", help="Print a stored value as JSON")
    p_get.add_argument("key")

    p_del = sub.add_parser("delete", help="Delete a stored value and all of its chunks")
    p_del.add_argument("key")

    p_inspect = sub.add_parser("inspect", help="Print the master metadata of a stored value")
    p_inspect.add_argument("key")
    return p


def parse_value(text: str) -> Any:
    """Interpret ``text`` as JSON, falling back to the literal string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


def build_store(settings: dict, data_dir: Optional[str] = None) -> SecureItemStore:
    password = None
    if settings.get("encrypt"):
        password = os.environ.get(PASSWORD_ENV) or getpass("Store password (input hidden): ")

    backend = create_backend(
        settings.get("backend", "file"),
        data_dir=data_dir or settings.get("data_dir"),
        max_value_size=settings.get("max_value_size"),
        password=password,
    )
    config = StoreConfig.from_settings(settings)
    codec = BrotliCodec(quality=settings.get("compression_quality", 4))
    return SecureItemStore(backend, config=config, codec=codec)


async def run_command(store: SecureItemStore, args: argparse.Namespace) -> int:
    if args.command == "set":
        storage_type = StorageType.UNCOMPRESSED if args.uncompressed else StorageType.COMPRESSED
        await store.set_item(args.key, parse_value(args.value), storage_type)
        return 0

    if args.command == "get":
        result = await store.get_item_result(args.key)
        if not isinstance(result, Found):
            print(f"No value stored under {args.key}", file=sys.stderr)
            return 1
        print(json.dumps(result.value, ensure_ascii=False))
        return 0

    if args.command == "delete":
        await store.delete_item(args.key)
        return 0

    if args.command == "inspect":
        metadata = await store.inspect_item(args.key)
        if metadata is None:
            print(f"No value stored under {args.key}", file=sys.stderr)
            return 1
        print(metadata.to_wire())
        return 0

    raise ValueError(f"unknown command {args.command!r}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    logger = configure_logging(args.config, level=args.log_level)
    try:
        settings = load_settings(args.config)
        store = build_store(settings, data_dir=args.data_dir)
        return asyncio.run(run_command(store, args))
    except SecureStoreError as e:
        logger.debug("securestore %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2
