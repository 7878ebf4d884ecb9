#!/usr/bin/env python3
"""
Configuration Management CLI Tool

Usage:
    python -m config.cli show          # Show current configuration
    python -m config.cli show --json   # JSON format output
    python -m config.cli validate      # Validate configuration
    python -m config.cli env           # Generate environment variable template
"""

from __future__ import annotations

import argparse
import json
import sys


def cmd_show(args):
    """Show current configuration"""
    from config.settings import settings

    if args.json:
        data = settings.model_dump(mode="json")
        if data.get("sentry", {}).get("dsn"):
            data["sentry"]["dsn"] = "*" * 8
        if data.get("web", {}).get("metrics_key"):
            data["web"]["metrics_key"] = "*" * 8
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    print("=" * 60)
    print("Catalog Search Configuration")
    print("=" * 60)

    print("\n📁 Data Directories:")
    print(f"  data_dir:    {settings.data_dir}")
    print(f"  log_dir:     {settings.log_dir}")
    print(f"  log_to_file: {settings.log_to_file}")

    print("\n🌐 Service Configuration:")
    print(f"  host:        {settings.host}")
    print(f"  serve_port:  {settings.serve_port}")
    print(f"  log_level:   {settings.log_level}")
    print(f"  log_format:  {settings.log_format}")
    print(f"  swagger:     {settings.enable_swagger}")

    print("\n🔍 Search Configuration:")
    print(f"  default_limit:     {settings.search.default_limit}")
    print(f"  max_limit:         {settings.search.max_limit}")
    print(f"  new_arrivals_days: {settings.search.new_arrivals_days}")
    print(f"  trace_enabled:     {settings.search.trace_enabled}")
    print(f"  trace_top_n:       {settings.search.trace_top_n}")

    print("\n🗄️  Database Configuration:")
    print(f"  timeout:          {settings.db.timeout}")
    print(f"  max_retries:      {settings.db.max_retries}")
    print(f"  retry_base_sleep: {settings.db.retry_base_sleep}")

    print("\n📈 Web Configuration:")
    print(f"  access_log:       {settings.web.access_log}")
    print(f"  enable_metrics:   {settings.web.enable_metrics}")
    print(f"  metrics_key:      {'*' * 8 if settings.web.metrics_key else '(not set)'}")

    print("\n🚨 Sentry Configuration:")
    print(f"  enabled:          {settings.sentry.enabled}")
    print(f"  dsn:              {'*' * 8 if settings.sentry.dsn else '(not set)'}")
    print(f"  environment:      {settings.sentry.environment or '(not set)'}")


def cmd_validate(args):
    """Validate configuration"""
    from config.settings import settings

    errors = []
    warnings = []

    if not settings.data_dir.exists():
        warnings.append(f"Data directory does not exist yet: {settings.data_dir}")

    if settings.log_level.upper() not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"Unknown log level: {settings.log_level}")

    if settings.sentry.enabled and not settings.sentry.dsn.strip():
        errors.append("Sentry is enabled but CATALOG_SEARCH_SENTRY_DSN is not set")

    if settings.web.enable_metrics and not settings.web.metrics_key:
        warnings.append("/metrics is enabled without a metrics key")

    if errors:
        print("❌ Configuration validation failed:")
        for e in errors:
            print(f"  - {e}")
        print()

    if warnings:
        print("⚠️  Configuration warnings:")
        for w in warnings:
            print(f"  - {w}")
        print()

    if not errors and not warnings:
        print("✅ Configuration validation passed")
    elif not errors:
        print("✅ Configuration validation passed (with warnings)")

    return 1 if errors else 0


def cmd_env(args):
    """Generate environment variable template"""
    from config.settings import settings

    print("# Environment variable representation of current configuration")
    print("# Can be copied to .env file")
    print()

    print(f"CATALOG_SEARCH_DATA_DIR={settings.data_dir}")
    print(f"CATALOG_SEARCH_HOST={settings.host}")
    print(f"CATALOG_SEARCH_SERVE_PORT={settings.serve_port}")
    print(f"CATALOG_SEARCH_LOG_LEVEL={settings.log_level}")
    print(f"CATALOG_SEARCH_LOG_FORMAT={settings.log_format}")
    print()

    print(f"CATALOG_SEARCH_SEARCH_DEFAULT_LIMIT={settings.search.default_limit}")
    print(f"CATALOG_SEARCH_SEARCH_MAX_LIMIT={settings.search.max_limit}")
    print(f"CATALOG_SEARCH_SEARCH_NEW_ARRIVALS_DAYS={settings.search.new_arrivals_days}")
    print(f"CATALOG_SEARCH_SEARCH_TRACE_ENABLED={str(settings.search.trace_enabled).lower()}")
    print(f"CATALOG_SEARCH_SEARCH_TRACE_TOP_N={settings.search.trace_top_n}")
    print()

    print(f"CATALOG_SEARCH_DB_TIMEOUT={settings.db.timeout}")
    print(f"CATALOG_SEARCH_DB_MAX_RETRIES={settings.db.max_retries}")
    print()

    print(f"CATALOG_SEARCH_ENABLE_METRICS={str(settings.web.enable_metrics).lower()}")
    print(f"CATALOG_SEARCH_SENTRY_ENABLED={str(settings.sentry.enabled).lower()}")


def main():
    parser = argparse.ArgumentParser(
        description="Catalog Search Configuration Management Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m config.cli show          Show current configuration
  python -m config.cli show --json   JSON format output
  python -m config.cli validate      Validate configuration
  python -m config.cli env           Generate environment variables
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    show_parser = subparsers.add_parser("show", help="Show current configuration")
    show_parser.add_argument("--json", action="store_true", help="JSON format output")

    subparsers.add_parser("validate", help="Validate configuration")

    subparsers.add_parser("env", help="Generate environment variable template")

    args = parser.parse_args()

    if args.command == "show":
        cmd_show(args)
    elif args.command == "validate":
        sys.exit(cmd_validate(args))
    elif args.command == "env":
        cmd_env(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
