"""
Command-line interface for the Lox interpreter.
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List, TextIO

import yaml

from lox.lox import Lox, LoxExitStatus
from lox.lox_ast_printer import LoxASTPrinter
from lox.lox_config import LoxConfig


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging to a rotating file if one is given, otherwise to stderr."""
    handler: logging.Handler
    if log_file:
        # Keep up to 6 log files, max 1MB each
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,
            backupCount=5,
            encoding='utf-8'
        )

    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler],
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lox",
        description="Lox tree-walking interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Start an interactive session
  %(prog)s script.lox               # Run a script
  %(prog)s script.lox --ast         # Show the parsed program
  %(prog)s -c lox.yaml script.lox   # Run with settings from a config file
        """
    )

    parser.add_argument('script', nargs='?', help='Lox script to run (omit for a REPL)')
    parser.add_argument('--config', '-c', help='YAML configuration file path')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')
    parser.add_argument('--log-file', help='Write logs to this rotating log file')

    dump_group = parser.add_mutually_exclusive_group()
    dump_group.add_argument('--tokens', action='store_true', help='Print the token list instead of running')
    dump_group.add_argument('--ast', action='store_true', help='Print the parsed program instead of running')

    return parser


def load_config(args: argparse.Namespace) -> LoxConfig:
    """Load the configuration file, if any, and apply command-line overrides."""
    config = LoxConfig.load_from_file(args.config) if args.config else LoxConfig()

    if args.log_level:
        config.log_level = args.log_level

    if args.log_file:
        config.log_file = args.log_file

    return config


def run_prompt(lox: Lox, prompt: str, stdin: TextIO) -> LoxExitStatus:
    """Read and run one line at a time until end of input."""
    while True:
        lox.output.write(prompt)
        lox.output.flush()

        line = stdin.readline()
        if not line:
            lox.output.write("\n")
            return LoxExitStatus.OK

        # Errors are reported per line and do not end the session
        lox.run(line)


def dump(lox: Lox, path: str, show_tokens: bool) -> LoxExitStatus:
    """Print the tokens or AST of a script."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()

    except OSError as e:
        lox.error_output.write(f"Could not read file '{path}': {e.strerror or e}\n")
        return LoxExitStatus.IO_ERROR

    if show_tokens:
        for token in lox.tokens(source):
            lox.output.write(f"{token.line}: {token}\n")

    else:
        statements = lox.parse(source)
        if statements:
            lox.output.write(LoxASTPrinter().print_program(statements) + "\n")

    if lox.error_reporter.had_error:
        return LoxExitStatus.COMPILE_ERROR

    return LoxExitStatus.OK


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)

    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return LoxExitStatus.USAGE

    config_errors = config.validate()
    if config_errors:
        print("Configuration errors found:", file=sys.stderr)
        for error in config_errors:
            print(f"  - {error}", file=sys.stderr)

        return LoxExitStatus.USAGE

    setup_logging(config.log_level, config.log_file)
    lox = Lox(config=config)

    if args.script is None:
        if args.tokens or args.ast:
            parser.error("--tokens and --ast need a script")

        return run_prompt(lox, config.repl_prompt, sys.stdin)

    if args.tokens or args.ast:
        return dump(lox, args.script, args.tokens)

    return lox.run_file(args.script)


if __name__ == '__main__':
    sys.exit(main())
