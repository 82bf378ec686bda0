# src/prover_cache/cli/main.py

"""
`prover-cache` - inspect and maintain a prover task cache from the shell.

Examples:
  prover-cache last
  prover-cache count
  prover-cache delete 0000000042
  prover-cache put task.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from ..config import Settings, get_settings
from ..errors import StorageUnavailable, TaskCacheError
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskWrapper
from .bootstrap import create_task_cache

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prover-cache",
        description="Prover task cache maintenance tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Data and log directory; the default cache lives in <data-dir>/task_cache",
    )
    parser.add_argument("--cache-path", type=Path, help="Task cache directory (overrides settings)")
    parser.add_argument("--log-level", help="Console log level (overrides settings)")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    subparsers.add_parser("last", help="Print the most recent cached task")
    subparsers.add_parser("count", help="Print the number of cached tasks")

    delete_parser = subparsers.add_parser("delete", help="Delete a cached task")
    delete_parser.add_argument("task_id", help="Task id to delete")

    put_parser = subparsers.add_parser("put", help="Store a task record from a JSON file")
    put_parser.add_argument("file", help="Path to a task record JSON document, or - for stdin")

    return parser


def _load_record(source: str) -> TaskWrapper:
    if source == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(source).read_text("utf-8")
    return TaskWrapper.from_dict(json.loads(raw))


def main(argv: list[str] | None = None, *, settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)

    if settings is None:
        settings = get_settings()
    if args.data_dir is not None:
        settings = replace(
            settings, data_dir=args.data_dir, task_cache_path=args.data_dir / "task_cache"
        )
    if args.cache_path is not None:
        settings = replace(settings, task_cache_path=args.cache_path)

    level_name = str(args.log_level or settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(
        log_dir=settings.data_dir if settings.log_to_file else None,
        console_level=console_level,
    )

    records: list[TaskWrapper] = []
    if args.command == "put":
        try:
            records.append(_load_record(args.file))
        except (OSError, KeyError, TypeError, ValueError) as exc:
            print(f"Error: cannot read task record from {args.file}: {exc}", file=sys.stderr)
            return 1

    try:
        task_cache = create_task_cache(settings)
    except StorageUnavailable as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        if args.command == "last":
            last = task_cache.get_last_task()
            if last is None:
                print("empty")
            else:
                print(json.dumps(last.to_dict(), ensure_ascii=False, indent=2))

        elif args.command == "count":
            print(task_cache.count_tasks())

        elif args.command == "delete":
            existed = task_cache.delete_task(args.task_id)
            print(f"deleted {args.task_id}" if existed else f"absent {args.task_id}")

        elif args.command == "put":
            for record in records:
                task_cache.put_task(record)
                print(f"stored {record.task_id}")

    except TaskCacheError as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        task_cache.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
