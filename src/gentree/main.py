from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI controller and turns unexpected crashes into a
logged report and a non-zero exit code.
"""

import logging
import os
import sys
import traceback
from typing import Any

# -----------------------------------------------------------------------------
# ENVIRONMENT INITIALIZATION
# -----------------------------------------------------------------------------

# Allows 'python src/gentree/main.py' without installing the package
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log an unhandled exception with its stack trace and echo it on stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("gentree.supervisor").critical(f"FATAL EXCEPTION DETECTED: {value}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (GENTREE)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)

# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Run the CLI controller.

    Returns:
        int: Process exit code.
    """
    try:
        from gentree.interface.cli.app import main as cli_main
        return cli_main()
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
