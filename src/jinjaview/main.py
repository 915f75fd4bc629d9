from __future__ import annotations

"""
Main Entry Point.

Runs the CLI and turns unexpected crashes into a logged stack trace and
a non-zero exit code.
"""

import logging
import os
import sys
import traceback

# Allow running this file directly from a source checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


def main() -> int:
    """
    Delegate to the CLI controller.

    Returns:
        int: Process exit code.
    """
    from jinjaview.interface.cli.app import main as cli_main

    try:
        return cli_main()
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        stack_trace = traceback.format_exc()
        logging.getLogger("jinjaview.supervisor").critical(f"FATAL EXCEPTION DETECTED: {e}\n{stack_trace}")
        print(f"CRITICAL ERROR: {e}\n{stack_trace}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
