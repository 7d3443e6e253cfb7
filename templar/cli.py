from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import ConfigError, TemplarConfig, load_config
from .engine import load_template, render_config
from .errors import TemplarUserError
from .template.nodes import format_ast_tree
from .version import tool_version

_LOG = logging.getLogger("templar")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("TEMPLAR_DEBUG") else logging.INFO
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="templar",
        description="Templar template compiler",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Shared arguments for run/generate
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            type=Path,
            help="path to the config file (default: ./templar.yaml if present)",
        )
        sp.add_argument(
            "--template",
            type=Path,
            help="template file to render (overrides 'template' from the config)",
        )
        sp.add_argument(
            "--var",
            action="append",
            metavar="NAME=VALUE",
            help="variable binding (can be given several times, overrides the config)",
        )

    sp_run = sub.add_parser("run", help="Render the template to stdout")
    add_common(sp_run)
    sp_run.add_argument(
        "--dump-ast",
        action="store_true",
        help="print the parsed tree instead of rendering",
    )

    sp_gen = sub.add_parser("generate", help="Render the template to the output file")
    add_common(sp_gen)
    sp_gen.add_argument(
        "-o", "--output",
        type=Path,
        help="output file (overrides 'output' from the config; stdout if neither is set)",
    )

    return p


def _parse_vars(specs: Optional[List[str]]) -> Dict[str, str]:
    """Parses 'NAME=VALUE' items into a mapping."""
    result: Dict[str, str] = {}
    if not specs:
        return result

    for spec in specs:
        if "=" not in spec:
            raise ValueError(f"Invalid variable format '{spec}'. Expected 'NAME=VALUE'")
        name, value = spec.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid variable format '{spec}'. Variable name is empty")
        result[name] = value

    return result


def _resolve_config(ns: argparse.Namespace) -> TemplarConfig:
    config = load_config(Path.cwd(), ns.config)
    return config.with_overrides(
        template=ns.template.resolve() if ns.template else None,
        output=getattr(ns, "output", None),
        variables=_parse_vars(ns.var),
    )


def _cmd_run(ns: argparse.Namespace) -> int:
    config = _resolve_config(ns)
    if ns.dump_ast:
        if config.template is None:
            raise ConfigError("No template specified (set 'template' in templar.yaml or pass --template)")
        template = load_template(config.template, max_depth=config.max_depth)
        sys.stdout.write(format_ast_tree(template.blocks) + "\n")
        return 0
    sys.stdout.write(render_config(config))
    return 0


def _cmd_generate(ns: argparse.Namespace) -> int:
    config = _resolve_config(ns)
    text = render_config(config)
    if config.output is None:
        sys.stdout.write(text)
        return 0
    config.output.parent.mkdir(parents=True, exist_ok=True)
    config.output.write_text(text, encoding="utf-8")
    _LOG.info("Wrote %s (%d chars)", config.output, len(text))
    return 0


_COMMANDS = {
    "run": _cmd_run,
    "generate": _cmd_generate,
}


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        return _COMMANDS[ns.cmd](ns)
    except (TemplarUserError, ValueError) as e:
        sys.stderr.write(f"Failed to execute command '{ns.cmd}': {str(e).rstrip()}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
