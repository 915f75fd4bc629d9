from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Command and sub command routing.
2. Mapping of CLI flags to configuration keys.
3. CSV string parsing logic.
"""

import pytest

from jinjaview.interface.cli.args import _split_csv, args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_tree_command_flags():
    args = parse_args(["tree", "--plugin", "Blog", "--json"])

    assert args.command == "tree"
    assert args.plugin == "Blog"
    assert args.json_output is True


def test_compile_targets():
    assert parse_args(["compile", "all"]).target == "all"

    plugin_args = parse_args(["compile", "plugin", "Blog"])
    assert plugin_args.target == "plugin"
    assert plugin_args.name == "Blog"

    file_args = parse_args(["compile", "file", "templates/index.jinja"])
    assert file_args.target == "file"
    assert file_args.path == "templates/index.jinja"


def test_compile_plugin_requires_name():
    with pytest.raises(SystemExit):
        parse_args(["compile", "plugin"])


def test_global_options():
    args = parse_args(["-c", "conf.json", "-b", "/srv/app", "--log-file", "out.log", "tree"])

    assert args.config_path == "conf.json"
    assert args.base_dir == "/srv/app"
    assert args.log_file == "out.log"


def test_overrides_mapping():
    """Verify flags are mapped correctly to config overrides."""
    overrides = args_to_overrides(parse_args(["--ext", ".jinja, .twig", "--debug", "tree"]))

    assert overrides == {"extensions": [".jinja", ".twig"], "debug": True}


def test_no_overrides_by_default():
    assert args_to_overrides(parse_args(["tree"])) == {}


def test_split_csv():
    assert _split_csv(None) is None
    assert _split_csv(" a, ,b ") == ["a", "b"]
