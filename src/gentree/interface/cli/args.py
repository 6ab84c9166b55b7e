from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command line schema of the materializer and translates the
parsed namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from gentree.domain.config import DEFAULT_LOG_FILE
from gentree.infra.logging import LOG_LEVELS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the gentree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="gentree",
        description=(
            "Materialize generated content as a single file, rewriting the "
            "target only when its bytes change."
        ),
    )

    # --- Target ---
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory the file is materialized in (created if missing).",
    )
    p.add_argument(
        "-n", "--name",
        dest="file_name",
        default=None,
        help="Name of the generated file.",
    )
    p.add_argument(
        "-s", "--source",
        dest="source_path",
        default=None,
        help="File providing the content, or '-' for stdin (default).",
    )

    # --- Configuration ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: user data directory).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )

    # --- Execution ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the target path without generating anything.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=[lvl for lvl in LOG_LEVELS if lvl != "WARN"],
        help="Logging threshold.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const=DEFAULT_LOG_FILE,
        default=None,
        help="Also write logs to this rotating file (user data directory when no path is given).",
    )

    return p

# -----------------------------------------------------------------------------
# NAMESPACE MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Map parsed arguments to configuration keys.

    Values left unset on the command line are None so that the merge step
    keeps the configured value.
    """
    return {
        "output_dir": args.output_dir,
        "file_name": args.file_name,
        "source_path": args.source_path,
        "log_level": "DEBUG" if args.debug else args.log_level,
        "log_file": args.log_file,
    }
