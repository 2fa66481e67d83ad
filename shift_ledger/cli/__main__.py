from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.error_log import ErrorLogBuffer, read_error_log
from ..logging.init import log_summary, setup_logging
from ..services.progress import ProgressTracker
from ..services.submissions import SubmissionError, SubmissionService, dashboard_payload
from ..services.summary import render_summary_line
from ..store import build_store

"""CLI entrypoint.

Commands:
- submit  normalize one payload and append it to the configured store
- list    read the store back as records (dashboard JSON with --json)
- replay  re-append rows saved in a failed-append error log

Exit codes: 0 success, 1 fatal (config / store / input), 2 partial failure.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="shift-ledger", description="Shift submission ledger")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to YAML config")
    p.add_argument("--env-file", type=Path, default=Path(".env"), help="dotenv file to load")
    sub = p.add_subparsers(dest="command", required=True)

    submit = sub.add_parser("submit", help="Append one submission")
    src = submit.add_mutually_exclusive_group(required=True)
    src.add_argument("--payload", help="Submission payload as a JSON object")
    src.add_argument("--payload-file", type=Path, help="File containing the JSON payload")

    listing = sub.add_parser("list", help="Read submissions back")
    listing.add_argument("--json", action="store_true", help="Print the dashboard JSON to stdout")

    replay = sub.add_parser("replay", help="Re-append rows from an error log")
    replay.add_argument("error_log", type=Path, help="errors-*.log file to replay")
    return p.parse_args(argv)


def _read_payload(args: argparse.Namespace) -> Any:
    text = args.payload if args.payload is not None else args.payload_file.read_text(encoding="utf-8")
    return json.loads(text or "{}")


def _cmd_submit(service: SubmissionService, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        payload = _read_payload(args)
    except (OSError, ValueError) as e:
        logger.error(f"payload: {e}")
        return EXIT_FATAL
    try:
        row = service.submit(payload)
    except SubmissionError as e:
        logger.error(f"submit: {e}")
        return EXIT_FATAL
    logger.info(f"appended store={service.store.describe()} row={json.dumps(row, ensure_ascii=False)}")
    return EXIT_SUCCESS


def _cmd_list(service: SubmissionService, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        schema, records = service.read()
    except SubmissionError as e:
        logger.error(f"list: {e}")
        return EXIT_FATAL
    if args.json:
        print(json.dumps(dashboard_payload(schema, records), ensure_ascii=False))
    line = render_summary_line(records, service.codec_config.rate_mode)
    log_summary(line[len("SUMMARY "):])
    return EXIT_SUCCESS


def _cmd_replay(service: SubmissionService, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        entries = [e for e in read_error_log(args.error_log) if e.row]
    except (OSError, ValueError) as e:
        logger.error(f"replay: {e}")
        return EXIT_FATAL

    with ProgressTracker(len(entries)) as progress:
        for entry in entries:
            try:
                service.append_row(entry.row)
            except SubmissionError:
                progress.finish_row(success=False)
            else:
                progress.finish_row(success=True)
        ok, failed = progress.succeeded, progress.failed

    log_summary(f"replayed={len(entries)} ok={ok} failed={failed}")
    if failed and ok:
        return EXIT_PARTIAL_FAILURE
    return EXIT_FATAL if failed else EXIT_SUCCESS


COMMANDS = {
    "submit": _cmd_submit,
    "list": _cmd_list,
    "replay": _cmd_replay,
}


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(args.env_file, override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        store = build_store(cfg.store)
    except ValueError as e:
        logger.error(f"store: {e}")
        return EXIT_FATAL

    service = SubmissionService(store, cfg.codec, ErrorLogBuffer())
    logger.debug(
        f"store={store.describe()} rate_mode={cfg.codec.rate_mode.value} "
        f"schema_source={cfg.codec.schema_source.value}"
    )
    return COMMANDS[args.command](service, args, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
