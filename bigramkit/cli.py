#!/usr/bin/env python3
"""
bigramkit CLI
=============
Command-line interface for training, sampling and inspecting bigram models.

Usage:
    bigramkit generate -n 10 --corpus names.txt --seed 42
    bigramkit counts --corpus names.txt --top 20
    bigramkit heatmap --corpus names.txt --probabilities
    bigramkit evaluate --corpus names.txt andrej emma
"""

import argparse
import json
import sys

from rich.console import Console
from rich.table import Table

from bigramkit import __version__
from bigramkit.config import GenerationConfig, HeatmapConfig
from bigramkit.data import load_names
from bigramkit.errors import BigramError
from bigramkit.logs import init_logging
from bigramkit.model import BigramModel
from bigramkit.persistence import load_model, save_model
from bigramkit.settings import get_setting, resolve_path

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False,
                 console: Console = None,
                 err_console: Console = None):
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

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
        for h in headers:
            table.add_column(str(h))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def corpus_path(args):
    value = args.corpus or get_setting("corpus.path")
    return resolve_path(value)


def load_corpus(args) -> list:
    unique = args.unique or bool(get_setting("corpus.unique", False))
    return load_names(corpus_path(args), unique=unique)


def build_model(args) -> BigramModel:
    """Load a saved model or fit one on the corpus.

    --smoothing given alongside --model re-normalizes the saved counts.
    """
    model_path = getattr(args, 'model', None)
    smoothing = getattr(args, 'smoothing', None)
    if model_path:
        model = load_model(resolve_path(model_path))
        if smoothing is not None and smoothing != model.smoothing:
            model = BigramModel.from_counts(model.counts, smoothing=smoothing)
        return model
    return BigramModel(smoothing=smoothing).fit(load_corpus(args))


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Sample names from the model."""
    cfg = GenerationConfig(count=args.count, max_length=args.max_length, seed=args.seed)
    model = build_model(args)
    gen = model.generator(seed=cfg.seed, max_length=cfg.max_length)

    if args.verbose:
        rows = []
        for i in range(1, cfg.count + 1):
            trace = gen.trace()
            result = model.evaluate([trace.name])
            flag = " (truncated)" if trace.truncated else ""
            rows.append([i, f"{trace.name}{flag}", f"{result.log_likelihood:.4f}", f"{result.mean_nll:.4f}"])
        out.table(['#', 'Name', 'Log likelihood', 'Mean NLL'], rows)
    else:
        for name in gen.generate(cfg.count):
            print(name)

    return 0


def cmd_counts(args, out: Output):
    """Show the most common bigrams."""
    model = build_model(args)
    top = model.counts.most_common(args.top)

    if args.json:
        data = [{'bigram': a + b, 'count': c} for (a, b), c in top]
        print(json.dumps(data, indent=2))
        return 0

    probabilities = model.probabilities
    rows = [[a + b, c, f"{probabilities.get(a, b):.4f}"] for (a, b), c in top]
    out.table(['Bigram', 'Count', 'P(next|cur)'], rows, title="Bigram counts")
    out.print(f"Total transitions: {model.counts.total()}")
    return 0


def cmd_vocab(args, out: Output):
    """Show the vocabulary."""
    model = build_model(args)
    vocab = model.vocabulary
    rows = [[i, repr(symbol), model.counts.row_sum(i)] for i, symbol in enumerate(vocab.symbols)]
    out.table(['Index', 'Symbol', 'Outgoing'], rows, title=f"Vocabulary ({vocab.size()} symbols)")
    return 0


def cmd_evaluate(args, out: Output):
    """Report the negative log likelihood of words under the model."""
    model = build_model(args)
    words = args.words or load_corpus(args)
    result = model.evaluate(words)

    out.print(f"Words:          {len(words)}")
    out.print(f"Transitions:    {result.count}")
    out.print(f"Log likelihood: {result.log_likelihood:.4f}")
    out.print(f"NLL:            {result.nll:.4f}")
    out.print(f"Mean NLL:       {result.mean_nll:.4f}")
    return 0


def cmd_heatmap(args, out: Output):
    """Render the count or probability matrix as an image."""
    from bigramkit.plot import plot_counts, plot_probabilities

    cfg = HeatmapConfig()
    model = build_model(args)

    if args.probabilities:
        output = args.output or cfg.outputs.get("probabilities", "bigrams_probabilities.png")
        path = plot_probabilities(model.probabilities, resolve_path(output), config=cfg)
    else:
        output = args.output or cfg.outputs.get("counts", "bigrams.png")
        path = plot_counts(model.counts, resolve_path(output), config=cfg)

    out.success(f"Heatmap saved as {path}")
    return 0


def cmd_save(args, out: Output):
    """Fit on the corpus and save the counts as JSON."""
    model = build_model(args)
    path = save_model(model, resolve_path(args.output))
    out.success(f"Model saved to {path}")
    return 0


# =============================================================================
# Main
# =============================================================================

def _add_corpus_args(p, allow_model: bool = True):
    p.add_argument('--corpus', '-c', help='Names file, one per line (default: corpus.path)')
    p.add_argument('--unique', '-u', action='store_true', help='Drop repeated names')
    p.add_argument('--smoothing', '-k', type=float, help='Add-k smoothing (default: model.smoothing; re-normalizes a --model)')
    if allow_model:
        p.add_argument('--model', help='Load a saved model instead of fitting the corpus')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bigramkit',
        description='bigramkit - Character-level bigram name model',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 10 --corpus names.txt --seed 2147483647
  %(prog)s generate -n 5 --model model.json -v
  %(prog)s counts --corpus names.txt --top 20
  %(prog)s evaluate --corpus names.txt andrej
  %(prog)s evaluate --model model.json -k 1 andrej
  %(prog)s heatmap --corpus names.txt --probabilities -o probs.png
  %(prog)s save --corpus names.txt -o model.json
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--log-level', help='Log level (default: $BIGRAMKIT_LOG or logging.level)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    _add_corpus_args(p)
    p.add_argument('-n', '--count', type=int, help='Number of names (default: generation.count)')
    p.add_argument('--seed', '-s', type=int, help='Random seed for reproducible output')
    p.add_argument('--max-length', type=int, help='Safety bound on name length')
    p.add_argument('--verbose', '-v', action='store_true', help='Show likelihood per name')

    # --- counts ---
    p = subparsers.add_parser('counts', help='Show most common bigrams')
    _add_corpus_args(p)
    p.add_argument('--top', '-t', type=int, default=20, help='Number of bigrams (default: 20)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- vocab ---
    p = subparsers.add_parser('vocab', help='Show vocabulary')
    _add_corpus_args(p)

    # --- evaluate ---
    p = subparsers.add_parser('evaluate', aliases=['eval', 'e'], help='Negative log likelihood of words')
    _add_corpus_args(p)
    p.add_argument('words', nargs='*', help='Words to score (default: the corpus)')

    # --- heatmap ---
    p = subparsers.add_parser('heatmap', help='Render bigram heatmap')
    _add_corpus_args(p)
    p.add_argument('--output', '-o', help='Image path (default: heatmap.outputs)')
    p.add_argument('--probabilities', '-p', action='store_true', help='Plot probabilities instead of counts')

    # --- save ---
    p = subparsers.add_parser('save', help='Fit and save model as JSON')
    _add_corpus_args(p, allow_model=False)
    p.add_argument('--output', '-o', required=True, help='JSON file to write')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'eval': 'evaluate', 'e': 'evaluate',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=getattr(args, 'quiet', False))

    try:
        init_logging(args.log_level)
    except ValueError as e:
        out.error(str(e))
        return 1

    commands = {
        'generate': cmd_generate,
        'counts': cmd_counts,
        'vocab': cmd_vocab,
        'evaluate': cmd_evaluate,
        'heatmap': cmd_heatmap,
        'save': cmd_save,
    }

    handler = commands.get(command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (BigramError, OSError, ValueError) as e:
        out.error(str(e))
        if getattr(args, 'verbose', False):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
