"""
CLI entrypoint for the repository structure and multi-collection tools.

Subcommands:
- structure: converts a discipline-matrix CSV (cluster_abbrev, for_code, for_title)
  into XML for the repository "structure-builder" tool
- multicollections: for every target reporting-year item already held in more
  than one collection (in the target or previous years), writes a batch
  metadata-editing CSV that maps the item to all of its collections

Both steps are fail-fast: any input-shape, referential or invariant error aborts
the run without writing output.
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import render_mapping_csv, run_multicollections, run_structure
from application.constants import STAGE_MULTICOLLECTIONS, STAGE_STRUCTURE
from application.multicollections import make_resolver
from domain.errors import TaxonomyError
from infrastructure.config import load_membership_config, load_structure_config
from infrastructure.constants import (
    ENV_LOG_LEVEL,
    ENV_MEMBERSHIP_FILE,
    ENV_STRUCTURE_FILE,
    MEMBERSHIP_FILE,
    STRUCTURE_FILE,
)
from infrastructure.io import ensure_exists, write_output
from infrastructure.observability import configure_logging, get_log_context, make_run_tag, set_log_context

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
EXIT_MISSING_FILE = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Build repository structure XML and multi-collection mapping CSV")
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file, loaded if present (default: .env)",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default=None,
        choices=LOG_LEVELS,
        help=f"Console log level (default: ${ENV_LOG_LEVEL} or INFO)",
    )
    p.add_argument("--log-file", type=str, default=None, help="Optional rotating log file (DEBUG level)")

    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("structure", help="Discipline-matrix CSV -> structure-builder XML")
    s.add_argument("csv", type=str, help="Discipline-matrix CSV file")
    s.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to structure.yaml (default: ${ENV_STRUCTURE_FILE} or {STRUCTURE_FILE})",
    )
    s.add_argument("--output", type=str, default=None, help="Write XML here instead of stdout")
    s.add_argument("--snapshot", type=str, default=None, help="Write the resolved config as JSON here")

    m = sub.add_parser("multicollections", help="Reporting-year handle CSVs -> multi-collection mapping CSV")
    m.add_argument("target_csv", type=str, help="Handle CSV for the target reporting year")
    m.add_argument(
        "previous_csv",
        type=str,
        nargs="?",
        default=None,
        help="Handle CSV for all reporting years before the target year (optional)",
    )
    m.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to membership.yaml (default: ${ENV_MEMBERSHIP_FILE} or {MEMBERSHIP_FILE})",
    )
    m.add_argument("--output", type=str, default=None, help="Write the mapping CSV here instead of stdout")
    m.add_argument(
        "--exclusive",
        type=str,
        default=None,
        help="Also write target items that remain in a single collection to this CSV",
    )
    m.add_argument(
        "--lookup-csv",
        type=str,
        default=None,
        help="Handle export used to add rmid, item_name and col_names columns",
    )
    return p.parse_args(argv)


def _config_path(arg: str | None, env_var: str, default: Path) -> Path:
    return Path(arg or os.environ.get(env_var) or default)


def _run_structure(args: argparse.Namespace) -> None:
    config_path = _config_path(args.config, ENV_STRUCTURE_FILE, STRUCTURE_FILE)
    ensure_exists(config_path, "structure.yaml")
    csv_path = Path(args.csv)
    ensure_exists(csv_path, "discipline-matrix CSV")

    cfg = load_structure_config(config_path)
    logger.info("XML for 'structure-builder' tool (config=%s)", config_path)

    _, xml = run_structure(cfg, csv_path)

    if args.snapshot:
        Path(args.snapshot).write_text(
            json.dumps(
                {"run": {**get_log_context(), "source": str(csv_path)}, "config": cfg.model_dump(mode="json")},
                ensure_ascii=False,
                indent=2,
                default=str,
            ),
            encoding="utf-8",
        )
    write_output(xml, Path(args.output) if args.output else None)
    if args.output:
        logger.info("Saved structure XML to %s", args.output)


def _run_multicollections(args: argparse.Namespace) -> None:
    config_path = _config_path(args.config, ENV_MEMBERSHIP_FILE, MEMBERSHIP_FILE)
    cfg = load_membership_config(config_path)

    target_csv = Path(args.target_csv)
    ensure_exists(target_csv, "target reporting-year CSV")
    previous_csv = Path(args.previous_csv) if args.previous_csv else None
    if previous_csv is not None:
        ensure_exists(previous_csv, "previous reporting-years CSV")

    logger.info("Creating a mapping CSV for allocating items to multiple collections")
    result = run_multicollections(cfg, target_csv, previous_csv)

    resolver = make_resolver(cfg, Path(args.lookup_csv) if args.lookup_csv else None)
    mapping_csv = render_mapping_csv(result.merged, cfg, resolver)
    exclusive_csv = render_mapping_csv(result.exclusive, cfg, resolver) if args.exclusive else None

    write_output(mapping_csv, Path(args.output) if args.output else None)
    if args.output:
        logger.info("Saved mapping CSV to %s", args.output)
    if exclusive_csv is not None:
        write_output(exclusive_csv, Path(args.exclusive))
        logger.info("Saved single-collection items to %s", args.exclusive)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=False)

    console_level = args.console_level or os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        console_level=getattr(logging, console_level, logging.INFO),
    )

    run_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{args.command}"
    stage = STAGE_STRUCTURE if args.command == "structure" else STAGE_MULTICOLLECTIONS
    set_log_context(run_id_full=run_id, stage=stage)
    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))

    try:
        if args.command == "structure":
            _run_structure(args)
        else:
            _run_multicollections(args)
    except TaxonomyError as e:
        logger.error("%s: %s", e.__class__.__name__, e)
        return e.exit_code
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_MISSING_FILE

    return 0


if __name__ == "__main__":
    sys.exit(main())
