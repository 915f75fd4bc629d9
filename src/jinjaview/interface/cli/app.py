from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, project file and CLI overrides), then either prints
the template trees or warms the compiled template cache.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from jinjaview.core.analysis.tree_renderer import render_tree_structure
from jinjaview.core.analysis.tree_scanner import TreeScanner
from jinjaview.core.config_validator import validate_config
from jinjaview.core.services.registry import UnitRegistry
from jinjaview.core.services.scanner import RelativeScanner
from jinjaview.core.view.compiler import CompileResult, compile_all, compile_file, compile_plugin
from jinjaview.core.view.view import JinjaView
from jinjaview.domain.config import default_config_path, get_default_config, load_config
from jinjaview.domain.errors import JinjaViewError
from jinjaview.domain.tree_models import ScanResult
from jinjaview.infra.fs import normalize_path
from jinjaview.infra.logging import LoggingConfig, configure_logging, get_logger
from jinjaview.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 if a template failed, 2 on invalid input.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Resolve configuration hierarchy
    config_path = args.config_path or default_config_path()
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(config_path)

    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))
    config, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(config, ensure_ascii=False, indent=2))
        return 0

    base_dir = normalize_path(args.base_dir, os.path.dirname(os.path.abspath(config_path)))
    registry = UnitRegistry.from_config(config, base_dir=base_dir)
    logger.debug(f"Units: {registry.units()} (base dir: {base_dir})")

    # 4. Command dispatch
    try:
        if args.command == "tree":
            return _run_tree(args, config, registry)
        if args.command == "compile":
            return _run_compile(args, parser, config, registry)
    except JinjaViewError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    parser.print_help(sys.stderr)
    return 2

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_tree(args: Any, config: Dict[str, Any], registry: UnitRegistry) -> int:
    delimiter = config["delimiter"]
    scanner = TreeScanner(RelativeScanner(registry, config["extensions"], delimiter), delimiter)

    if args.plugin:
        result: ScanResult = {args.plugin: scanner.plugin(args.plugin)}
    else:
        result = scanner.all()

    if args.json_output:
        payload = {unit: tree.to_dict() for unit, tree in result.items()}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    for unit, tree in result.items():
        lines: List[str] = []
        render_tree_structure(tree, lines, delimiter=delimiter)
        print(unit)
        for line in lines:
            print(line)
    return 0


def _run_compile(args: Any, parser: Any, config: Dict[str, Any], registry: UnitRegistry) -> int:
    if args.target is None:
        parser.print_help(sys.stderr)
        return 2

    if config["debug"]:
        logger.warning("Debug mode disables the template cache; nothing will be persisted.")

    view = JinjaView(registry, config)
    if args.target == "all":
        results = compile_all(view)
    elif args.target == "plugin":
        results = compile_plugin(view, args.name)
    else:
        results = [compile_file(view, args.path)]

    _print_human_summary(results)
    return 0 if all(r.ok for r in results) else 1

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(results: List[CompileResult]) -> None:
    for r in results:
        status = "OK    " if r.ok else "FAILED"
        line = f"{status} {r.name}"
        if r.error:
            line += f" ({r.error})"
        print(line)

    failed = sum(1 for r in results if not r.ok)
    print(f"\n{len(results) - failed} compiled, {failed} failed.")
