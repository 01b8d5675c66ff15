#!/usr/bin/env python3
"""
namekit CLI
===========
Command-line interface for Markov chain name generation.

Usage:
    namekit generate -n 10 --corpus norse --starts-with s
    namekit generate --words names.txt --order 2 --prior 0.01
    namekit train --corpus roman --corpus fantasy -o model.json
    namekit generate --model model.json --ends-with us
    namekit corpora
"""

import argparse
import json
import logging
import random
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from namekit import __version__
from namekit.corpus import get_corpus, list_categories, load_words
from namekit.generator import Generator
from namekit.name_generator import NameGenerator
from namekit.persistence import load_generator, save_generator
from namekit.settings import get_setting, resolve_path

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False)

    def success(self, msg: str):
        if not self.quiet:
            self.console.print(f"OK: {msg}", markup=False)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    """Configure the root logger to write through rich to stderr."""
    level = logging.DEBUG if verbose else get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(message)s"),
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def make_rng(seed):
    return random.Random(seed) if seed is not None else None


def load_training_words(args) -> list[str]:
    """Resolve training words from --words files or --corpus categories."""
    if args.words:
        words = []
        for path in args.words:
            words.extend(load_words(resolve_path(path)))
        return words
    return get_corpus(args.corpus)


def build_generator(args) -> Generator:
    """Train a generator from the command-line options and settings."""
    cfg = get_setting("generator", {}) or {}
    order = args.order if args.order is not None else cfg.get("order")
    prior = args.prior if args.prior is not None else cfg.get("prior")
    backoff = args.backoff if args.backoff is not None else cfg.get("backoff", False)
    if order is None or prior is None:
        raise ValueError("generator.order and generator.prior must be set in app.yaml")

    words = load_training_words(args)
    logger.info(f"Training order-{order} generator on {len(words)} words")
    return Generator(words, order, prior, backoff, rng=make_rng(args.seed))


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    if args.model:
        generator = load_generator(resolve_path(args.model), rng=make_rng(args.seed))
    else:
        generator = build_generator(args)
    name_gen = NameGenerator.from_generator(generator)

    cfg = get_setting("names", {}) or {}
    count = args.count if args.count is not None else cfg.get("count", 10)
    min_length = args.min_length if args.min_length is not None else cfg.get("min_length", 0)
    max_length = args.max_length if args.max_length is not None else cfg.get("max_length", sys.maxsize)
    max_time = (args.max_time_per_name if args.max_time_per_name is not None
                else cfg.get("max_time_per_name_ms", 200))
    unique = cfg.get("unique", False) if args.unique is None else args.unique

    if min_length > max_length:
        out.error(f"--min-length ({min_length}) is greater than --max-length ({max_length})")
        return 1

    names = name_gen.generate_names(
        count, min_length, max_length,
        args.starts_with, args.ends_with, args.includes, args.excludes,
        max_time_per_name=max_time,
        unique=unique,
    )

    if args.json:
        print(json.dumps(names, indent=2))
        return 0

    if not names:
        out.print("No names generated within the time limit.")
        return 0

    rows = [[i, name.capitalize()] for i, name in enumerate(names, 1)]
    out.table(['#', 'Name'], rows)
    if len(names) < count:
        out.print(f"Found {len(names)} of {count} names within the time limit.")

    return 0


def cmd_train(args, out: Output):
    """Train a generator and save it."""
    generator = build_generator(args)
    output = resolve_path(args.output)
    save_generator(generator, output)

    out.success(
        f"Saved order-{generator.order} generator "
        f"({len(generator.models)} models, {len(generator.alphabet)} symbols) to {output}"
    )
    return 0


def cmd_corpora(args, out: Output):
    """List built-in corpora."""
    default = get_setting("corpus.default")
    rows = []
    for name, count in list_categories().items():
        rows.append([name, count, '*' if name == default else ''])
    out.table(['Corpus', 'Words', 'Default'], rows)
    return 0


# =============================================================================
# Main
# =============================================================================

def _add_training_args(p):
    source = p.add_argument_group('training data')
    source.add_argument('--corpus', '-c', action='append',
                        help='Built-in corpus category (repeatable)')
    source.add_argument('--words', '-w', action='append', metavar='FILE',
                        help='Word-list file, one word per line (repeatable)')

    model = p.add_argument_group('model')
    model.add_argument('--order', '-o', type=int, help='Highest model order')
    model.add_argument('--prior', '-p', type=float, help='Dirichlet prior within [0, 1]')
    model.add_argument('--backoff', action=argparse.BooleanOptionalAction, default=None,
                       help='Fall back to lower-order models')
    model.add_argument('--seed', type=int, help='Random seed for repeatable output')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namekit',
        description='namekit - Markov Chain Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 10 --corpus norse
  %(prog)s generate -n 20 --words names.txt --order 2 --min-length 5
  %(prog)s generate --corpus roman --ends-with us --excludes x
  %(prog)s train --corpus elements --output elements.json
  %(prog)s generate --model elements.json --starts-with ur
  %(prog)s corpora
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('-n', '--count', type=int, help='Number of names')
    p.add_argument('--model', '-m', metavar='FILE', help='Use a saved generator instead of training')
    _add_training_args(p)
    constraints = p.add_argument_group('constraints')
    constraints.add_argument('--min-length', type=int, help='Minimum name length')
    constraints.add_argument('--max-length', type=int, help='Maximum name length')
    constraints.add_argument('--starts-with', default='', help='Required prefix')
    constraints.add_argument('--ends-with', default='', help='Required suffix')
    constraints.add_argument('--includes', default='', help='Required substring')
    constraints.add_argument('--excludes', default='', help='Forbidden substring')
    constraints.add_argument('--max-time-per-name', type=float, metavar='MS',
                             help='Time budget per name in milliseconds')
    constraints.add_argument('--unique', action=argparse.BooleanOptionalAction, default=None,
                             help='Skip duplicate names')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- train ---
    p = subparsers.add_parser('train', help='Train a generator and save it as JSON')
    _add_training_args(p)
    p.add_argument('--output', required=True, metavar='FILE', help='Output file path')

    # --- corpora ---
    subparsers.add_parser('corpora', help='List built-in corpora')

    # Parse
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {'gen': 'generate', 'g': 'generate'}
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'train': cmd_train,
        'corpora': cmd_corpora,
    }

    handler = commands[command]
    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (ValueError, OSError) as e:
        out.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
