"""CLI entry point for the Transpiler module."""
import argparse
import json
import sys


def main():
    parser = argparse.ArgumentParser(description="Convert challenge conditions to SpEL")
    parser.add_argument("text", help="Authoring-language condition (or stored rule with --reverse)")
    parser.add_argument("--catalog", default=None, help="Path to variable catalog JSON/YAML")
    parser.add_argument("--config", default=None, help="Transpiler YAML config")
    parser.add_argument("--reverse", action="store_true", help="Convert a stored SpEL rule back to source")
    args = parser.parse_args()

    from .catalog import load_catalog
    from .config import default_config, load_config
    from .pipeline import load_rule, transpile

    try:
        config = load_config(args.config) if args.config else default_config()
        catalog_path = args.catalog or config.catalog.path
        catalog = load_catalog(catalog_path) if catalog_path else None
    except FileNotFoundError as e:
        print(f"File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)

    if args.reverse:
        print(load_rule(args.text, config.transpiler))
        return

    result = transpile(args.text, catalog, config.transpiler)
    print(json.dumps(result.summary(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
