from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus the 'tree' and
'compile' commands) and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from jinjaview.domain.constants import CONFIG_FILENAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the jinjaview CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="jinjaview",
        description="Inspect and pre-compile Jinja2 templates of an application and its plugins.",
    )

    # --- Configuration ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help=f"Path to the configuration file (default: ./{CONFIG_FILENAME}).",
    )
    p.add_argument(
        "-b", "--base-dir",
        dest="base_dir",
        default=None,
        help="Directory relative template roots are resolved against (default: config file directory).",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma separated template extensions, e.g. '.jinja,.html'.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )

    sub = p.add_subparsers(dest="command")

    # --- tree ---
    tree = sub.add_parser("tree", help="Print the template tree of all units or of one plugin.")
    tree.add_argument("--plugin", dest="plugin", default=None, help="Only show this unit.")
    tree.add_argument("--json", dest="json_output", action="store_true", help="Emit JSON.")

    # --- compile ---
    comp = sub.add_parser("compile", help="Compile templates into the bytecode cache.")
    comp_sub = comp.add_subparsers(dest="target")
    comp_sub.add_parser("all", help="Compile every template.")
    comp_plugin = comp_sub.add_parser("plugin", help="Compile the templates of one plugin.")
    comp_plugin.add_argument("name")
    comp_file = comp_sub.add_parser("file", help="Compile a single template file.")
    comp_file.add_argument("path")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.debug:
        overrides["debug"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
