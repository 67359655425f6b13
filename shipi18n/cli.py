#!/usr/bin/env python3
"""
shipi18n - Translate JSON locale files with the Shipi18n API

Commands:
    translate - Translate a JSON locale file to multiple languages
    keys      - List, delete or export stored translation keys
    config    - Get, set or initialize CLI configuration

Every command prints a JSON result on stdout. Progress, fallback
information and warnings are logged to stderr.

Example Workflow:
    1. shipi18n config set apiKey sk_live_...
    2. shipi18n translate en.json --target es,fr,pt-BR
       → Writes locales/es.json, locales/fr.json, locales/pt-BR.json
    3. [Add keys to en.json]
    4. shipi18n translate en.json --target es,fr,pt-BR --incremental
       → Translates only the new keys and merges them into the saved files
"""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .api import Shipi18nAPI
from . import config as config_module
from .config import (
    DEFAULT_CONFIG,
    get_config,
    mask_api_key,
    parse_config_value,
    save_config,
    set_config_value,
)
from .errors import Shipi18nError
from .logger import format_error, logger, setup_logging, success
from .store import read_context
from .translator import TranslateOptions, TranslationRun


def split_list(value: str) -> list[str]:
    """Split a comma-separated option into a list."""
    return [item.strip() for item in value.split(",") if item.strip()] if value else []


def cmd_translate(args) -> dict:
    """Translate a JSON locale file."""
    config = get_config()

    if args.target:
        target_languages = split_list(args.target)
    else:
        target_languages = config.target_languages or ["es", "fr"]

    options = TranslateOptions(
        input_file=args.input,
        target_languages=target_languages,
        source_language=args.source or config.source_language,
        output_dir=args.output or config.output_dir,
        preserve_placeholders=args.preserve_placeholders,
        html_handling=args.html_handling,
        fallback_to_source=args.fallback,
        regional_fallback=args.regional_fallback,
        incremental=args.incremental,
        skip_keys=split_list(args.skip_keys),
        skip_paths=split_list(args.skip_paths),
        save_keys=args.save_keys or bool(config.save_keys),
        context=read_context(args.context) if args.context else None,
    )
    api = Shipi18nAPI(args.api_key or config.api_key)
    return TranslationRun(options, api).run()


def _api_for(args) -> Shipi18nAPI:
    return Shipi18nAPI(args.api_key or get_config().api_key)


def cmd_keys_list(args) -> dict:
    """List stored translation keys."""
    result = _api_for(args).list_keys()
    keys = result.get("keys") or []
    success("Found %d keys", len(keys))

    if not keys:
        logger.info("No translation keys found")
        logger.info("Create keys by translating JSON files with --save-keys")

    return {
        "status": "ok",
        "keys": [
            {
                "id": key.get("keyId") or key.get("id"),
                "name": key.get("keyName"),
                "source": key.get("sourceValue"),
                "languages": list((key.get("translations") or {}).keys()),
            }
            for key in keys
        ],
        "limit": result.get("limit") or "unlimited",
        "summary": f"Total: {len(keys)} keys | Limit: {result.get('limit') or 'unlimited'}",
    }


def cmd_keys_delete(args) -> dict:
    """Delete a stored translation key."""
    _api_for(args).delete_key(args.key_id)
    success("Deleted key: %s", args.key_id)
    return {
        "status": "ok",
        "deleted": args.key_id,
        "summary": f"Deleted key: {args.key_id}",
    }


def cmd_keys_export(args) -> dict:
    """Export stored translation keys."""
    result = _api_for(args).export_keys(args.format)

    if not args.output:
        return {"status": "ok", "format": args.format, "export": result}

    content = json.dumps(result, indent=2, ensure_ascii=False) if args.format == "json" else str(result)
    Path(args.output).write_text(content, encoding="utf-8")
    success("Exported to: %s", args.output)
    return {
        "status": "ok",
        "format": args.format,
        "output_file": args.output,
        "summary": f"Exported to: {args.output}",
    }


def cmd_config_get(args) -> dict:
    """Show configuration values."""
    config = get_config()

    if args.key:
        value = config.get(args.key)
        if value is None:
            logger.warning('Config key "%s" not found', args.key)
            return {"status": "not_found", "key": args.key}
        if args.key in ("apiKey", "api_key"):
            value = mask_api_key(value)
        return {"status": "ok", "key": args.key, "value": value}

    values = config.to_dict()
    if values.get("apiKey"):
        values["apiKey"] = mask_api_key(values["apiKey"])
    return {
        "status": "ok",
        "config": values,
        "config_file": str(config_module.CONFIG_FILE),
    }


def cmd_config_set(args) -> dict:
    """Set a configuration value."""
    value = parse_config_value(args.value)
    path = set_config_value(args.key, value)
    success("Set %s = %s", args.key, mask_api_key(value) if args.key == "apiKey" else value)

    result = {
        "status": "ok",
        "key": args.key,
        "value": mask_api_key(value) if args.key == "apiKey" else value,
        "config_file": str(path),
    }
    if args.key == "apiKey":
        result["next_action"] = {
            "command": "shipi18n translate en.json --target es,fr",
            "description": "API key saved! Try translating a file",
        }
    return result


def cmd_config_init(args) -> dict:
    """Write a config file with default values."""
    path = save_config(dict(DEFAULT_CONFIG))
    success("Created config file: %s", path)
    return {
        "status": "ok",
        "config_file": str(path),
        "next_steps": [
            "Get your API key at https://shipi18n.com",
            "Set your API key: shipi18n config set apiKey YOUR_KEY",
            "Translate: shipi18n translate en.json --target es,fr",
        ],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shipi18n",
        description="shipi18n - Translate your locale files with Shipi18n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Translate to several languages (pt-BR falls back to pt, then to source)
  shipi18n translate en.json --target es,fr,pt-BR

  # Only translate keys missing from the saved files
  shipi18n translate en.json --target es,fr --incremental

  # Keep brand names and config values untranslated
  shipi18n translate en.json --target es --skip-keys brandName --skip-paths 'config.*'

  # Manage stored keys
  shipi18n keys list
  shipi18n keys export --format csv --output keys.csv

  # Configure
  shipi18n config set apiKey sk_live_...
  shipi18n config get

Get started:
  1. Sign up at https://shipi18n.com and get your API key
  2. Run: shipi18n config set apiKey YOUR_KEY
  3. Translate: shipi18n translate en.json --target es,fr
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # translate command
    translate_parser = subparsers.add_parser("translate", help="Translate a JSON locale file to multiple languages")
    translate_parser.add_argument("input", help="Source JSON file")
    translate_parser.add_argument("--target", "-t", help="Target languages, comma-separated (default: config or es,fr)")
    translate_parser.add_argument("--source", "-s", help="Source language (default: config or en)")
    translate_parser.add_argument("--output", "-o", help="Output directory (default: config or ./locales)")
    translate_parser.add_argument("--api-key", help="API key (overrides config)")
    translate_parser.add_argument("--no-preserve-placeholders", dest="preserve_placeholders", action="store_false",
                                  help="Allow placeholders like {name}, {{value}} to be translated")
    translate_parser.add_argument("--html-handling", default="none", choices=["none", "strip", "decode", "preserve"],
                                  help="How to handle HTML in source text (default: none)")
    translate_parser.add_argument("--no-fallback", dest="fallback", action="store_false",
                                  help="Disable fallback to source language for missing translations")
    translate_parser.add_argument("--no-regional-fallback", dest="regional_fallback", action="store_false",
                                  help="Disable regional fallback (e.g., pt-BR -> pt)")
    translate_parser.add_argument("--incremental", "-i", action="store_true",
                                  help="Only translate new/missing keys (skip existing translations)")
    translate_parser.add_argument("--skip-keys", help="Exact key paths to leave untranslated, comma-separated")
    translate_parser.add_argument("--skip-paths", help="Wildcard path patterns to leave untranslated, comma-separated")
    translate_parser.add_argument("--save-keys", action="store_true", help="Store translated keys in your account")
    translate_parser.add_argument("--context", metavar="FILE",
                                  help="JSON file of key path -> note that guides the translation of that key")

    # keys command
    keys_parser = subparsers.add_parser("keys", help="Manage translation keys")
    keys_sub = keys_parser.add_subparsers(dest="keys_command", help="Key commands")

    keys_list = keys_sub.add_parser("list", help="List all translation keys")
    keys_list.add_argument("--api-key", help="API key (overrides config)")

    keys_delete = keys_sub.add_parser("delete", help="Delete a translation key")
    keys_delete.add_argument("key_id", help="Key ID")
    keys_delete.add_argument("--api-key", help="API key (overrides config)")

    keys_export = keys_sub.add_parser("export", help="Export all translation keys")
    keys_export.add_argument("--format", "-f", default="json", choices=["json", "csv"], help="Export format (default: json)")
    keys_export.add_argument("--output", "-o", help="Output file")
    keys_export.add_argument("--api-key", help="API key (overrides config)")

    # config command
    config_parser = subparsers.add_parser("config", help="Manage CLI configuration")
    config_sub = config_parser.add_subparsers(dest="config_command", help="Config commands")

    config_get = config_sub.add_parser("get", help="Get configuration value(s)")
    config_get.add_argument("key", nargs="?", help="Config key (e.g., apiKey)")

    config_set = config_sub.add_parser("set", help="Set configuration value")
    config_set.add_argument("key", help="Config key (e.g., apiKey)")
    config_set.add_argument("value", help="Value (true/false for booleans, commas for lists)")

    config_sub.add_parser("init", help="Initialize configuration file with defaults")

    return parser


COMMANDS = {
    ("translate", None): cmd_translate,
    ("keys", "list"): cmd_keys_list,
    ("keys", "delete"): cmd_keys_delete,
    ("keys", "export"): cmd_keys_export,
    ("config", "get"): cmd_config_get,
    ("config", "set"): cmd_config_set,
    ("config", "init"): cmd_config_init,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    subcommand = getattr(args, f"{args.command}_command", None)
    handler = COMMANDS.get((args.command, subcommand))
    if handler is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)

    try:
        result = handler(args)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Shipi18nError as e:
        logger.error(format_error(e))
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(format_error(e))
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
