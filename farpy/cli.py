"""
Command-line driver for the Farpy front end.

    farpy tokens main.fp     # one line per token
    farpy ast main.fp        # AST as JSON
"""

import argparse
import logging
import sys
from typing import List, Optional

from colorama import just_fix_windows_console

from . import __version__
from .lexer import tokenize_file, FarpyError
from .parser import Parser, dump_json

logger = logging.getLogger(__name__)


def _report(error: FarpyError, colored: bool):
    sys.stderr.write(error.render(colored=colored))


def _cmd_tokens(args) -> int:
    tokens = tokenize_file(args.file)
    for token in tokens:
        span = token.span
        print(f"{token.type.name:<16} {token.lexeme!r:<20} "
              f"line {span.line}, columns {span.start_column}-{span.end_column}")
    return 0


def _cmd_ast(args) -> int:
    tokens = tokenize_file(args.file)
    parser = Parser(tokens)
    statements = parser.parse()

    print(dump_json(statements, indent=args.indent))

    for error in parser.errors:
        _report(error, args.color)
    return 1 if parser.errors else 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="farpy",
        description="Farpy front end: dump tokens or the AST of a source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    farpy tokens main.fp               # List tokens with their spans
    farpy ast main.fp --indent 4       # Print the AST as JSON
        """
    )
    parser.add_argument('--version', action='version', version=f"farpy {__version__}")
    parser.add_argument('--no-color', dest='color', action='store_false',
                        help='Disable coloured diagnostics')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    tokens_parser = subparsers.add_parser('tokens', help='Print the token stream')
    tokens_parser.add_argument('file', help='Source file')
    tokens_parser.set_defaults(handler=_cmd_tokens)

    ast_parser = subparsers.add_parser('ast', help='Print the AST as JSON')
    ast_parser.add_argument('file', help='Source file')
    ast_parser.add_argument('--indent', type=int, default=2,
                            help='JSON indentation (default: 2)')
    ast_parser.set_defaults(handler=_cmd_ast)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit status."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.color:
        just_fix_windows_console()

    try:
        return args.handler(args)
    except FarpyError as e:
        _report(e, args.color)
        return 1
    except OSError as e:
        logger.error("could not read %s: %s", args.file, e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
