#!/usr/bin/env python3
"""Command-line interface for ResourceFS.

This module provides a CLI for inspecting a composed resource provider:
- Argument parsing and validation
- Configuration file loading and merging with command-line sources
- Listing, reading and describing files

Example:
    >>> from resourcefs.cli import parse_arguments
    >>> args = parse_arguments(["--package", "myapp:myapp.static", "ls"])
"""

import argparse
import os
import sys
import zipfile
from typing import Any, Dict, List, Optional

from resourcefs.core.constants import RESOURCEFS_VERSION, ConfigKey
from resourcefs.core.validators import ValidationError
from resourcefs.factory import ProviderFactory
from resourcefs.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from resourcefs.infrastructure.logger import Logger, configure_logging
from resourcefs.providers import EmbeddedFileProvider, FileInfo, ProviderConfigurationError

VERSION = RESOURCEFS_VERSION
DESCRIPTION = "ResourceFS - Read-only file lookup over bundled resources"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def _split_namespace(value: str) -> List[str]:
    """Split "TARGET[:NAMESPACE]" on the last colon."""
    target, sep, namespace = value.rpartition(":")
    if not sep:
        return [value, ""]
    return [target, namespace]


def _package_source(value: str) -> Dict[str, Any]:
    package, namespace = _split_namespace(value)
    if not package:
        raise argparse.ArgumentTypeError(f"Invalid package source: {value}")
    return {
        ConfigKey.SOURCE_TYPE: "package",
        ConfigKey.SOURCE_PACKAGE: package,
        ConfigKey.SOURCE_BASE_NAMESPACE: namespace,
    }


def _zip_source(value: str) -> Dict[str, Any]:
    path, namespace = _split_namespace(value)
    if not path:
        raise argparse.ArgumentTypeError(f"Invalid zip source: {value}")
    return {
        ConfigKey.SOURCE_TYPE: "zip",
        ConfigKey.SOURCE_PATH: os.path.abspath(os.path.expanduser(path)),
        ConfigKey.SOURCE_BASE_NAMESPACE: namespace,
    }


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="resourcefs",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List everything a package bundles under a namespace
  resourcefs --package myapp:myapp.static ls

  # Print a file, preferring a local directory over the package
  resourcefs --fallback ./static --package myapp:myapp.static cat css/site.css

  # Use a configuration file
  resourcefs --config resourcefs.yaml stat js/app.js

Sources are given lowest priority first: on duplicate paths the source
named last wins. The fallback directory wins over every source.
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    source_group = parser.add_argument_group("source options")

    source_group.add_argument(
        "-p",
        "--package",
        metavar="PKG[:NS]",
        dest="sources",
        action="append",
        type=_package_source,
        help="Importable package to read resources from, with optional base namespace",
    )

    source_group.add_argument(
        "-z",
        "--zip",
        metavar="PATH[:NS]",
        dest="sources",
        action="append",
        type=_zip_source,
        help="Zip archive to read resources from, with optional base namespace",
    )

    source_group.add_argument(
        "-f",
        "--fallback",
        metavar="DIR",
        type=str,
        help="Directory consulted before any source",
    )

    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    ls_parser = subparsers.add_parser("ls", help="List a directory")
    ls_parser.add_argument("subpath", nargs="?", default="", help="Directory path (default: root)")
    ls_parser.add_argument("-l", "--long", action="store_true", help="Show length and kind")

    cat_parser = subparsers.add_parser("cat", help="Write a file's content to stdout")
    cat_parser.add_argument("subpath", help="File path")

    stat_parser = subparsers.add_parser("stat", help="Describe a file")
    stat_parser.add_argument("subpath", help="File path")

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    if not args.config and not args.sources and not args.fallback:
        raise CLIError(
            "One of --config, --package, --zip or --fallback must be specified\n"
            "Use --help for usage information"
        )


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration dictionary from command-line arguments.

    Only options that were given appear in the result, so file
    configuration is kept for everything else. Paths are made absolute
    against the working directory.
    """
    config: Dict[str, Any] = {}

    if args.sources:
        config[ConfigKey.SOURCES] = list(args.sources)

    if args.fallback:
        config[ConfigKey.FALLBACK] = {
            ConfigKey.FALLBACK_ROOT: os.path.abspath(os.path.expanduser(args.fallback))
        }

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config["level"] = "DEBUG"
    if args.log_file:
        logging_config["file"] = args.log_file
    if logging_config:
        config[ConfigKey.LOGGING] = logging_config

    return config


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Load file configuration and overlay command-line arguments.

    The system and user config files are read when present; --config
    takes the place of the user file.

    Raises:
        ConfigError: If a configuration file can't be loaded
    """
    config = ConfigManager()
    config.load_default_files()
    if args.config:
        config.load_file(args.config)
    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """Configure logging from the merged configuration."""
    level = config.get("resourcefs.logging.level", "INFO")
    log_file = config.get("resourcefs.logging.file")
    return configure_logging(level=level, file=log_file)


def format_entry(info: FileInfo, long: bool = False) -> str:
    """Format one listing entry."""
    if not long:
        return info.name
    kind = "d" if info.is_directory else "-"
    length = "-" if info.is_directory else str(info.length)
    return f"{kind} {length:>10} {info.name}"


def cmd_ls(provider: EmbeddedFileProvider, args: argparse.Namespace) -> int:
    contents = provider.get_directory_contents(args.subpath)
    if not contents.exists:
        print(f"Directory not found: {args.subpath or '/'}", file=sys.stderr)
        return EXIT_NOT_FOUND

    for info in contents:
        print(format_entry(info, args.long))
    return EXIT_OK


def cmd_cat(provider: EmbeddedFileProvider, args: argparse.Namespace) -> int:
    info = provider.get_file_info(args.subpath)
    if not info.exists:
        print(f"File not found: {args.subpath}", file=sys.stderr)
        return EXIT_NOT_FOUND

    sys.stdout.buffer.write(info.read_bytes())
    sys.stdout.buffer.flush()
    return EXIT_OK


def cmd_stat(provider: EmbeddedFileProvider, args: argparse.Namespace) -> int:
    info = provider.get_file_info(args.subpath)
    if not info.exists:
        print(f"File not found: {args.subpath}", file=sys.stderr)
        return EXIT_NOT_FOUND

    print(f"name: {info.name}")
    print(f"length: {info.length}")
    print(f"directory: {str(info.is_directory).lower()}")
    print(f"last_modified: {info.last_modified.isoformat()}")
    print(f"physical_path: {info.physical_path or '-'}")
    return EXIT_OK


COMMANDS = {
    "ls": cmd_ls,
    "cat": cmd_cat,
    "stat": cmd_stat,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = load_configuration(args)
        provider_config = config.provider_config()
        logger = setup_logging(config)

        base_dir = os.path.dirname(os.path.abspath(args.config)) if args.config else None
        provider = ProviderFactory.create_provider(provider_config, base_dir)

        with logger.add_context(command=args.command):
            logger.debug("Running command", subpath=args.subpath)
            return COMMANDS[args.command](provider, args)

    except SystemExit as e:
        # argparse exits with 2 on usage errors, which is EXIT_NOT_FOUND here
        return EXIT_OK if e.code in (0, None) else EXIT_ERROR

    except (CLIError, ConfigError, ValidationError, ProviderConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except (ModuleNotFoundError, FileNotFoundError, zipfile.BadZipFile) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
