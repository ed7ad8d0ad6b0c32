"""Transpiler — challenge condition editor backend.

Usage:
    # Authoring text -> SpEL boolean rule + percentage formula
    python main.py forward "activity['commits'] >= 10 and activity['prs'] >= 2" --catalog variables.json

    # Stored SpEL rule -> authoring text for the edit form
    python main.py reverse "#progressField >= 0.5"

    # Editor completion items
    python main.py suggest act --catalog variables.json
"""
import argparse
import json
import sys
import logging

logger = logging.getLogger("Transpiler")


def _load(args):
    """Resolve config and catalog from the command line, exit 1 on missing files."""
    from Transpiler.catalog import default_catalog, load_catalog
    from Transpiler.config import default_config, load_config

    try:
        config = load_config(args.config) if args.config else default_config()
        catalog_path = getattr(args, "catalog", None) or config.catalog.path
        catalog = load_catalog(catalog_path) if catalog_path else default_catalog()
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        sys.exit(1)

    if catalog_path:
        logger.info("Loaded %d condition variables from %s", len(catalog), catalog_path)
    return config, catalog


def cmd_forward(args):
    """Authoring text -> rule, formula, interpretation."""
    from Transpiler.pipeline import transpile

    config, catalog = _load(args)
    result = transpile(args.text, catalog, config.transpiler)
    if not result.convertible:
        logger.info("Could not derive a percentage formula; showing the boolean rule only")
    print(json.dumps(result.summary(), indent=2, ensure_ascii=False))


def cmd_reverse(args):
    """Stored rule -> authoring text."""
    from Transpiler.pipeline import load_rule

    config, _ = _load(args)
    print(load_rule(args.rule, config.transpiler))


def cmd_suggest(args):
    """Completion items for a prefix."""
    from Transpiler.catalog import suggest

    _, catalog = _load(args)
    items = suggest(args.prefix, catalog)
    print(json.dumps([i.model_dump() for i in items], indent=2, ensure_ascii=False))


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
    )

    parser = argparse.ArgumentParser(
        prog="Transpiler",
        description="Convert challenge conditions between the authoring language and SpEL.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- forward ---
    p_forward = subparsers.add_parser("forward", help="Authoring text -> SpEL rule and progress formula")
    p_forward.add_argument("text", help="Condition in the authoring language")
    p_forward.add_argument("--catalog", default=None, help="Variable catalog JSON/YAML")
    p_forward.add_argument("--config", default=None, help="Transpiler YAML config")
    p_forward.set_defaults(func=cmd_forward)

    # --- reverse ---
    p_reverse = subparsers.add_parser("reverse", help="Stored SpEL rule -> authoring text")
    p_reverse.add_argument("rule", help="Stored SpEL boolean rule")
    p_reverse.add_argument("--config", default=None, help="Transpiler YAML config")
    p_reverse.set_defaults(func=cmd_reverse)

    # --- suggest ---
    p_suggest = subparsers.add_parser("suggest", help="Editor completion items")
    p_suggest.add_argument("prefix", help="Text typed so far")
    p_suggest.add_argument("--catalog", default=None, help="Variable catalog JSON/YAML")
    p_suggest.add_argument("--config", default=None, help="Transpiler YAML config")
    p_suggest.set_defaults(func=cmd_suggest)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
