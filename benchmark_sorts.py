#!/usr/bin/env python3
"""
Generic vs. Specialized Quicksort Benchmark - Main Runner
=========================================================

Times a quicksort that compares through a Comparator object against the
same quicksort with the comparison inlined, for ints and for strs.

Usage:
    python benchmark_sorts.py
    python benchmark_sorts.py --trials 20 --n 5000
    python benchmark_sorts.py --reference --distributions -o report.json
    python benchmark_sorts.py --seed 42 --quiet
"""

import argparse
import json
import sys

from benchmark_core import (
    BenchmarkConfig, BenchmarkEngine, BenchmarkReport,
    RandomIntegers, RandomStrings,
    get_variants, get_system_info, run_benchmark,
    print_header, print_subheader, print_sanity, print_results_table,
    Colors,
)
from quicksort import SortError


def run_sanity(engine: BenchmarkEngine, variants: dict, quiet: bool = False):
    """Sort one small array per element type and show it before and after."""
    config = engine.config
    if not quiet:
        print_header("Sanity Check")
        print(f"  {config.sanity_len} elements per array\n")

    results = engine.sanity_check(
        list(variants.values()),
        [RandomIntegers(), RandomStrings(config.sanity_string_len)],
    )

    if not quiet:
        print_sanity(results)
    return results


def run_trials(engine: BenchmarkEngine, variants: dict, quiet: bool = False):
    """Timed trials for every generator, one results table per input type."""
    config = engine.config
    if not quiet:
        print_header("Benchmark")
        print(f"  {config.trials} trials, n = {config.n}, max string length = {config.max_string_len}")

    def report(gen, group):
        if not quiet:
            print_subheader(f"Input: {gen.name}")
            print(f"  {gen.description}\n")
            print_results_table(group)

    return run_benchmark(engine, variants, on_result=report)


def build_report(config: BenchmarkConfig, variants: dict, sanity: list,
                 results: list) -> BenchmarkReport:
    """Build complete benchmark report."""
    metadata = get_system_info()
    metadata.update({
        "benchmark_version": "1.0.0",
        "config": {
            "trials": config.trials,
            "n": config.n,
            "max_string_len": config.max_string_len,
            "sanity_len": config.sanity_len,
            "seed": config.seed,
            "distributions": config.distributions,
        }
    })

    variant_info = {
        name: {
            "element_type": v.element_type.__name__,
            "path": v.path,
            "description": v.description,
        }
        for name, v in variants.items()
    }

    return BenchmarkReport(
        metadata=metadata,
        variant_info=variant_info,
        sanity=sanity,
        results=results,
    )


def _positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def build_parser():
    defaults = BenchmarkConfig()
    parser = argparse.ArgumentParser(
        description="Generic vs. specialized quicksort benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   Sanity check + default benchmark
  %(prog)s --trials 20 --n 5000              More trials on smaller arrays
  %(prog)s --reference -o report.json        Add baselines, save JSON report
  %(prog)s --distributions                   Add sorted/reversed int inputs
        """
    )

    parser.add_argument("--trials", type=_positive_int, default=defaults.trials,
                        help=f"Timed trials per variant (default: {defaults.trials})")
    parser.add_argument("--n", type=_positive_int, default=defaults.n,
                        help=f"Array size (default: {defaults.n})")
    parser.add_argument("--max-len", type=_positive_int, default=defaults.max_string_len,
                        help=f"Max random string length (default: {defaults.max_string_len})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: unseeded)")
    parser.add_argument("--reference", action="store_true",
                        help="Include iterative, Timsort and NumPy reference variants")
    parser.add_argument("--distributions", action="store_true",
                        help="Also benchmark sorted and reversed int inputs")
    parser.add_argument("--no-sanity", action="store_true", help="Skip the sanity check")
    parser.add_argument("--output", "-o", type=str, help="JSON output path")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = BenchmarkConfig(
        trials=args.trials,
        n=args.n,
        max_string_len=args.max_len,
        seed=args.seed,
        distributions=args.distributions,
    )
    variants = get_variants(include_reference=args.reference)
    engine = BenchmarkEngine(config)

    if not args.quiet:
        print(f"\n{Colors.BOLD}Generic vs. Specialized Quicksort Benchmark{Colors.END}")
        print(f"Python {sys.version.split()[0]} | {len(variants)} variants\n")

    sanity = []
    try:
        if not args.no_sanity:
            sanity = run_sanity(engine, variants, args.quiet)
        results = run_trials(engine, variants, args.quiet)
    except SortError as e:
        print(f"{Colors.RED}error: {type(e).__name__}: {e}{Colors.END}", file=sys.stderr)
        return 1

    report = build_report(config, variants, sanity, results)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, default=str)
        if not args.quiet:
            print(f"\n{Colors.GREEN}JSON report saved to {args.output}{Colors.END}")

    if not args.quiet:
        print(f"\n{Colors.CYAN}Benchmark complete.{Colors.END}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
