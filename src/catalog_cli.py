"""
D2 Catalog - Command Line Entry Point

Examples:
  d2-catalog parse mods.txt                  # display lines -> JSON properties
  echo "Fire Resist +30%" | d2-catalog parse
  d2-catalog render props.json               # JSON properties -> display lines
  d2-catalog bases --catalog-dir data/d2     # runeword base rows as JSON
  d2-catalog bases --summary -v              # bases per runeword, debug logging
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import APP_VERSION, LOG_FILE, LOG_LEVEL

logger = logging.getLogger("d2-catalog")


def setup_logging(verbose: bool = False, log_file: Optional[str] = LOG_FILE):
    """
    Logs go to stderr so stdout stays clean JSON / text output.
    A file handler is added when a log file is configured.
    """
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )

    # Quiet noisy loggers unless verbose
    if not verbose:
        for name in ("reverse_translator", "stat_registry", "catalog_loader"):
            logging.getLogger(name).setLevel(logging.WARNING)


def _read_input(path: Optional[str]) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _build_engine(catalog_dir: Optional[str] = None):
    from core import CatalogEngine
    from games.d2 import create_d2_config

    engine = CatalogEngine(create_d2_config(catalog_dir=catalog_dir))
    engine.initialize()
    return engine


# ─── Subcommands ─────────────────────────────────────

def cmd_parse(args) -> int:
    engine = _build_engine()
    props = engine.translate_mod_lines(_read_input(args.input).splitlines())
    json.dump([p.to_dict() for p in props], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_render(args) -> int:
    from property_translator import Property

    data = json.loads(_read_input(args.input))
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise ValueError("expected a JSON object or a list of objects")
    engine = _build_engine()
    for line in engine.render(Property.from_dict(d) for d in data):
        print(line)
    return 0


def cmd_bases(args) -> int:
    from type_hierarchy import ResolveStats

    engine = _build_engine(args.catalog_dir)
    catalog = engine.load_catalog()
    stats = ResolveStats()
    edges = engine.compute_runeword_bases(catalog, stats)

    if args.summary:
        names = {rw.id: rw.display_name for rw in catalog.runewords}
        counts = {}
        for edge in edges:
            counts[edge.recipe_id] = counts.get(edge.recipe_id, 0) + 1
        for rw in catalog.runewords:
            print(f"{names[rw.id]}: {counts.get(rw.id, 0)} bases")
        if stats.skipped:
            print(f"Skipped: {', '.join(stats.skipped_names)}")
    else:
        json.dump([e.to_row() for e in edges], sys.stdout, indent=2)
        sys.stdout.write("\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="d2-catalog",
        description="D2 Catalog - item property codec and runeword base resolver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Display lines -> JSON properties")
    p_parse.add_argument("input", nargs="?", help="Text file, one line per mod (default: stdin)")
    p_parse.set_defaults(func=cmd_parse)

    p_render = sub.add_parser("render", help="JSON properties -> display lines")
    p_render.add_argument("input", nargs="?", help="JSON file (default: stdin)")
    p_render.set_defaults(func=cmd_render)

    p_bases = sub.add_parser("bases", help="Compute runeword base compatibility")
    p_bases.add_argument("--catalog-dir", help="Directory with the TSV data files")
    p_bases.add_argument("--summary", action="store_true",
                         help="Print base counts per runeword instead of JSON rows")
    p_bases.set_defaults(func=cmd_bases)

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        return args.func(args)
    except (FileNotFoundError, ValueError, TypeError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
