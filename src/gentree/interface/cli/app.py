from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one materialization: configuration merging (defaults, JSON
file, command line overrides), logging bootstrap, construction of the
generated single-file tree and rendering of the result.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, BinaryIO, Dict, List, Optional

from gentree.core.generators import file_copy_generator, stream_generator
from gentree.core.singleton_tree import GeneratedSingletonFileTree
from gentree.core.validator import is_stdin_source, validate_config
from gentree.domain.config import get_default_config, load_config
from gentree.domain.errors import GeneratedTreeError
from gentree.domain.tree_models import ContentGenerator, ResolvedFile
from gentree.infra.fs import fixed_directory_source
from gentree.infra.logging import LoggingConfig, configure_logging, get_logger
from gentree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments; sys.argv when omitted.
        stdin: Binary stream used for the '-' source; sys.stdin when omitted.

    Returns:
        int: 0 on success, 1 on materialization failure, 2 on invalid input.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 2. Logging bootstrap
    configure_logging(
        LoggingConfig(level=conf["log_level"], console=True, log_file=conf["log_file"] or None)
    )
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 3. Pre-flight checks
    if not conf["file_name"]:
        print("ERROR: a file name is required (--name).", file=sys.stderr)
        return EXIT_USAGE

    source_path = conf["source_path"]
    if not is_stdin_source(source_path) and not os.path.isfile(source_path):
        logger.error(f"Source file does not exist: {source_path}")
        print(f"ERROR: source file does not exist: {source_path}", file=sys.stderr)
        return EXIT_USAGE

    output_dir = conf["output_dir"]

    # 4. Dry run never creates the output directory
    if args.dry_run:
        tree = GeneratedSingletonFileTree(lambda: output_dir, conf["file_name"], _no_content)
        print(tree.get_file_without_creating())
        return EXIT_OK

    generator = _build_generator(source_path, stdin)
    tree = GeneratedSingletonFileTree(
        fixed_directory_source(output_dir), conf["file_name"], generator
    )

    # 5. Materialization
    logger.info(f"Materializing '{conf['file_name']}' into {output_dir}")
    try:
        result = tree.resolve()
    except (GeneratedTreeError, OSError) as e:
        logger.critical(f"Materialization failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Rendering
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)
    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-None overrides for known keys."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out


def _build_generator(source_path: str, stdin: Optional[BinaryIO]) -> ContentGenerator:
    if is_stdin_source(source_path):
        return stream_generator(stdin if stdin is not None else sys.stdin.buffer)
    return file_copy_generator(source_path)


def _no_content(sink: BinaryIO) -> None:
    pass


def _print_human_summary(result: ResolvedFile) -> None:
    status = "written" if result.written else "unchanged"
    print(f"{status}: {result.path} ({result.size} bytes)")


if __name__ == "__main__":
    sys.exit(main())
