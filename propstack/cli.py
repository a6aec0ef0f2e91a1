#!/usr/bin/env python3
"""
propstack command line

Resolves the layered configuration for the active profile and prints the
result. Sensitive values are always masked in output and reports.
"""

import argparse
import sys
from datetime import datetime
from typing import Dict, List, Optional

import yaml

from .config import ConfigContext, ConfigError, ConfigLoader
from .utils.logger import ResolutionLogger, setup_logging


def _parse_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    """Parse repeated ``key=value`` arguments."""
    result = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"{option} expects key=value, got {pair!r}")
        result[key.strip()] = value.strip()
    return result


def create_report(loader: ConfigLoader) -> dict:
    """Create a display report of the current resolution."""
    resolver = loader.resolver
    summary = resolver.profile_configuration()
    return {
        'profile': loader.profile,
        'sources': loader.registry.names(),
        'profile_configuration': {
            'environment': summary.environment,
            'log_level': summary.log_level,
            'debug_enabled': summary.debug_enabled,
            'metrics_enabled': summary.metrics_enabled,
            'cache_enabled': summary.cache_enabled,
            'security_strict': summary.security_strict,
        },
        'feature_flags': resolver.feature_flags().to_dict(),
        'capabilities': dict(loader.capabilities.items()),
        'properties': resolver.display_properties().to_dict(),
        'generated_at': datetime.now().isoformat(),
    }


def print_status(loader: ConfigLoader):
    """Print current configuration status."""
    report = create_report(loader)

    print("\n=== Active Configuration ===")
    summary = report['profile_configuration']
    print(f"Environment: {summary['environment']}")
    print(f"Log Level: {summary['log_level']}")
    print(f"Debug Features: {'ENABLED' if summary['debug_enabled'] else 'DISABLED'}")
    print(f"Performance Metrics: {'ENABLED' if summary['metrics_enabled'] else 'DISABLED'}")
    print(f"Caching: {'ENABLED' if summary['cache_enabled'] else 'DISABLED'}")
    print(f"Strict Security: {'ENABLED' if summary['security_strict'] else 'DISABLED'}")

    print("\n=== Sources (highest precedence first) ===")
    for name in report['sources']:
        print(f"  - {name}")

    if report['feature_flags']:
        print("\n=== Feature Flags ===")
        for key, value in report['feature_flags'].items():
            print(f"  {key}: {value}")

    print("\n=== Effective Properties ===")
    for key, value in report['properties'].items():
        print(f"  {key}: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='propstack', description='Layered configuration resolver')
    parser.add_argument('--profile', help='Active profile (overrides ENVIRONMENT)')
    parser.add_argument('--resources', help='Directory of .properties resources (default: bundled)')
    parser.add_argument('--env-file', help='Read additional environment variables from a .env file')
    parser.add_argument('-D', dest='properties', action='append', metavar='KEY=VALUE',
                        help='Process-wide configuration property (repeatable)')
    parser.add_argument('--set', dest='overrides', action='append', metavar='KEY=VALUE',
                        help='Explicit override, highest precedence (repeatable)')
    parser.add_argument('--log-level', default='WARNING', help='Log level for diagnostics on stderr')
    parser.add_argument('--status', action='store_true', help='Show profile, sources and effective properties')
    parser.add_argument('--get', metavar='KEY', help='Print the display value of one key')
    parser.add_argument('--report', metavar='FILE', help='Write a YAML report of the resolution')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for command-line usage."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level)

    try:
        context = ConfigContext.capture(
            overrides=_parse_pairs(args.overrides, '--set'),
            properties=_parse_pairs(args.properties, '-D'),
            dotenv_path=args.env_file,
        )
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        loader = ConfigLoader(context=context, namespace=args.resources, profile=args.profile)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    ResolutionLogger(loader.resolver).log_sources()

    if args.get:
        value = loader.resolver.get_display_value(args.get)
        if value is None:
            print(f"Key not configured: {args.get}", file=sys.stderr)
            return 1
        print(value)
    elif args.status:
        print_status(loader)
    elif args.report:
        report = create_report(loader)
        with open(args.report, 'w', encoding='utf-8') as f:
            yaml.safe_dump(report, f, default_flow_style=False, sort_keys=False)
        print(f"Configuration report saved to {args.report}")
    else:
        parser.print_help()

    return 0


if __name__ == '__main__':
    sys.exit(main())
