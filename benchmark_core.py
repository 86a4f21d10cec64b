"""
Generic vs. Specialized Quicksort Benchmark - Core Module
=========================================================

Contains: configuration, statistics, input generators, sort variants,
benchmark engine, result types and console formatting.
"""

from __future__ import annotations
import gc, math, platform, random, statistics, string, sys, time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from contextlib import contextmanager

import numpy as np

from quicksort import (
    IntComparator, StrComparator,
    sort, sort_ints, sort_strs, sort_iterative,
)

# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class BenchmarkConfig:
    trials: int = 10
    n: int = 10000
    max_string_len: int = 100
    sanity_len: int = 10
    sanity_string_len: int = 8
    seed: Optional[int] = None
    distributions: bool = False
    gc_between_runs: bool = True


class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        for a in ['HEADER','BLUE','CYAN','GREEN','YELLOW','RED','BOLD','UNDERLINE','END']:
            setattr(cls, a, '')

if not sys.stdout.isatty():
    Colors.disable()

# =============================================================================
# Statistics
# =============================================================================

@dataclass
class Statistics:
    n: int
    total: float
    mean: float
    median: float
    std_dev: float
    min_val: float
    max_val: float
    raw_values: List[float] = field(default_factory=list, repr=False)

    @classmethod
    def from_samples(cls, samples: List[float]) -> "Statistics":
        """Aggregate per-trial durations. mean is always total / n."""
        if not samples:
            return cls(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, [])

        n = len(samples)
        total = math.fsum(samples)
        return cls(n=n, total=total, mean=total / n,
                   median=statistics.median(samples),
                   std_dev=statistics.stdev(samples) if n > 1 else 0.0,
                   min_val=min(samples), max_val=max(samples),
                   raw_values=list(samples))


# =============================================================================
# Input Generators
# =============================================================================

class InputGenerator(ABC):
    @property
    @abstractmethod
    def name(self) -> str: pass

    @property
    @abstractmethod
    def description(self) -> str: pass

    @property
    @abstractmethod
    def element_type(self) -> type: pass

    @abstractmethod
    def generate(self, n: int, rng: random.Random) -> list: pass


class RandomIntegers(InputGenerator):
    name = "random_int"
    description = "Random ints in [0, n)"
    element_type = int
    def generate(self, n, rng):
        return [rng.randrange(n) for _ in range(n)]

class RandomStrings(InputGenerator):
    name = "random_str"
    description = "Random lowercase strings"
    element_type = str
    alphabet = string.ascii_lowercase

    def __init__(self, max_len: int = 100):
        if max_len < 1:
            raise ValueError(f"max_len must be >= 1, got {max_len}")
        self.max_len = max_len

    def generate(self, n, rng):
        return [''.join(rng.choices(self.alphabet, k=rng.randint(1, self.max_len)))
                for _ in range(n)]

class SortedIntegers(InputGenerator):
    name = "sorted_int"
    description = "Already sorted"
    element_type = int
    def generate(self, n, rng):
        return list(range(n))

class ReversedIntegers(InputGenerator):
    name = "reversed_int"
    description = "Descending order"
    element_type = int
    def generate(self, n, rng):
        return list(range(n, 0, -1))


def get_generators(config: BenchmarkConfig) -> List[InputGenerator]:
    gens = [RandomIntegers(), RandomStrings(config.max_string_len)]
    if config.distributions:
        gens += [SortedIntegers(), ReversedIntegers()]
    return gens


# =============================================================================
# Sort Variants
# =============================================================================

GENERIC = "generic"
SPECIALIZED = "specialized"
REFERENCE = "reference"


@dataclass
class SortVariant:
    name: str
    function: Callable
    element_type: type
    path: str
    description: str

    def __call__(self, arr, rng):
        return self.function(arr, rng)


_INT_CMP = IntComparator()
_STR_CMP = StrComparator()

def _generic_int(a, rng):
    sort(a, 0, len(a) - 1, _INT_CMP, rng)

def _generic_str(a, rng):
    sort(a, 0, len(a) - 1, _STR_CMP, rng)

def _specialized_int(a, rng):
    sort_ints(a, 0, len(a) - 1, rng)

def _specialized_str(a, rng):
    sort_strs(a, 0, len(a) - 1, rng)

def _iterative_int(a, rng):
    sort_iterative(a, 0, len(a) - 1, _INT_CMP, rng)

def _iterative_str(a, rng):
    sort_iterative(a, 0, len(a) - 1, _STR_CMP, rng)

def _timsort(a, rng):
    a.sort()

def _numpy_qs(a, rng):
    x = np.array(a, dtype=np.int64)
    x.sort(kind='quicksort')
    a[:] = x.tolist()


def get_variants(include_reference=False) -> Dict[str, SortVariant]:
    variants = {
        "Generic int": SortVariant(
            "Generic int", _generic_int, int, GENERIC,
            "Quicksort through IntComparator.compare"),
        "Specialized int": SortVariant(
            "Specialized int", _specialized_int, int, SPECIALIZED,
            "Quicksort with inline int <"),
        "Generic str": SortVariant(
            "Generic str", _generic_str, str, GENERIC,
            "Quicksort through StrComparator.compare"),
        "Specialized str": SortVariant(
            "Specialized str", _specialized_str, str, SPECIALIZED,
            "Quicksort with inline str <"),
    }

    if include_reference:
        variants.update({
            "Iterative int": SortVariant(
                "Iterative int", _iterative_int, int, REFERENCE,
                "Explicit-stack quicksort through IntComparator"),
            "Iterative str": SortVariant(
                "Iterative str", _iterative_str, str, REFERENCE,
                "Explicit-stack quicksort through StrComparator"),
            "Timsort int": SortVariant(
                "Timsort int", _timsort, int, REFERENCE, "Python list.sort()"),
            "Timsort str": SortVariant(
                "Timsort str", _timsort, str, REFERENCE, "Python list.sort()"),
            "NumPy int": SortVariant(
                "NumPy int", _numpy_qs, int, REFERENCE, "NumPy introsort"),
        })

    return variants


# =============================================================================
# Result Types
# =============================================================================

@dataclass
class SanityResult:
    variant: str
    element_type: str
    before: list
    after: list
    correct: bool

    def to_dict(self):
        return {
            "variant": self.variant,
            "element_type": self.element_type,
            "before": self.before,
            "after": self.after,
            "correct": self.correct,
        }


@dataclass
class VariantResult:
    variant: str
    path: str
    element_type: str
    input_type: str
    n: int
    stats: Statistics
    correct: bool

    def to_dict(self):
        return {
            "variant": self.variant,
            "path": self.path,
            "element_type": self.element_type,
            "input_type": self.input_type,
            "n": self.n,
            "correct": self.correct,
            "stats": {
                "trials": self.stats.n,
                "total_seconds": self.stats.total,
                "mean_seconds": self.stats.mean,
                "median_seconds": self.stats.median,
                "std_dev": self.stats.std_dev,
                "min": self.stats.min_val,
                "max": self.stats.max_val,
            }
        }


@dataclass
class BenchmarkReport:
    metadata: Dict[str, Any]
    variant_info: Dict[str, Dict[str, Any]]
    sanity: List[SanityResult]
    results: List[VariantResult]

    def to_dict(self):
        return {
            "metadata": self.metadata,
            "variant_info": self.variant_info,
            "sanity": [s.to_dict() for s in self.sanity],
            "results": [r.to_dict() for r in self.results],
        }


# =============================================================================
# Benchmark Engine
# =============================================================================

class BenchmarkEngine:
    """
    Runs sort variants against generated input.

    The engine owns one random.Random seeded from config.seed; it feeds both
    data generation and pivot selection, so a fixed seed replays a run.
    """

    def __init__(self, config: BenchmarkConfig = BenchmarkConfig()):
        self.config = config
        self.rng = random.Random(config.seed)

    @contextmanager
    def _gc_pause(self):
        if self.config.gc_between_runs:
            gc.collect()
            gc.disable()
        try:
            yield
        finally:
            if self.config.gc_between_runs:
                gc.enable()

    def time_once(self, fn, arr) -> Tuple[float, list]:
        a = arr[:]
        with self._gc_pause():
            t0 = time.perf_counter()
            fn(a, self.rng)
            t1 = time.perf_counter()
        return (t1 - t0, a)

    def verify(self, fn, arr) -> bool:
        """Sort a copy of arr and check it against sorted(). Sort errors propagate."""
        a = arr[:]
        fn(a, self.rng)
        return a == sorted(arr)

    def sanity_check(self, variants: List[SortVariant],
                     generators: List[InputGenerator]) -> List[SanityResult]:
        """Sort one small array per generator with every matching variant."""
        results = []
        for gen in generators:
            arr = gen.generate(self.config.sanity_len, self.rng)
            for v in variants:
                if v.element_type is not gen.element_type:
                    continue
                _, after = self.time_once(v.function, arr)
                results.append(SanityResult(v.name, gen.element_type.__name__,
                                            arr[:], after, after == sorted(arr)))
        return results

    def compare(self, variants: List[SortVariant], gen: InputGenerator,
                n: int) -> List[VariantResult]:
        """
        Time every variant matching gen's element type over config.trials trials.

        Each trial generates one fresh array and hands each variant its own
        copy, so within a trial all variants sort identical input. The first
        trial's output is checked against sorted(); a variant that gets it
        wrong is not timed further.
        """
        active = [v for v in variants if v.element_type is gen.element_type]
        times: Dict[str, List[float]] = {v.name: [] for v in active}
        correct = {v.name: True for v in active}

        for trial in range(self.config.trials):
            arr = gen.generate(n, self.rng)
            expected = sorted(arr) if trial == 0 else None
            for v in active:
                if not correct[v.name]:
                    continue
                t, result = self.time_once(v.function, arr)
                if expected is not None and result != expected:
                    correct[v.name] = False
                    continue
                times[v.name].append(t)

        return [VariantResult(v.name, v.path, gen.element_type.__name__, gen.name, n,
                              Statistics.from_samples(times[v.name]), correct[v.name])
                for v in active]


def run_benchmark(engine: BenchmarkEngine, variants: Dict[str, SortVariant],
                  on_result: Optional[Callable[[InputGenerator, List[VariantResult]], None]] = None
                  ) -> List[VariantResult]:
    """Compare every variant on every configured generator."""
    results = []
    for gen in get_generators(engine.config):
        group = engine.compare(list(variants.values()), gen, engine.config.n)
        if on_result:
            on_result(gen, group)
        results.extend(group)
    return results


# =============================================================================
# Formatting & Output
# =============================================================================

def fmt_time(t):
    """Format time with appropriate units."""
    if t == float('inf'):
        return "timeout"
    if t < 1e-6:
        return f"{t*1e9:.1f}ns"
    if t < 1e-3:
        return f"{t*1e6:.1f}us"
    if t < 1:
        return f"{t*1e3:.2f}ms"
    return f"{t:.3f}s"


def get_system_info():
    """Gather system information for reproducibility."""
    return {
        "timestamp": datetime.now().isoformat(),
        "python_version": sys.version,
        "platform": platform.platform(),
        "processor": platform.processor() or "unknown",
        "machine": platform.machine(),
        "numpy_version": np.__version__,
    }


def print_header(text):
    print(f"\n{Colors.BOLD}{Colors.HEADER}{'='*70}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{text.center(70)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{'='*70}{Colors.END}\n")


def print_subheader(text):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.CYAN}{'-'*len(text)}{Colors.END}")


def print_sanity(results: List[SanityResult]):
    """Print before/after arrays for visual inspection."""
    for r in results:
        status = f"{Colors.GREEN}OK{Colors.END}" if r.correct else f"{Colors.RED}FAIL{Colors.END}"
        print(f"  {r.variant:<18} {status}")
        print(f"    before: {' '.join(map(str, r.before))}")
        print(f"    after:  {' '.join(map(str, r.after))}")


def print_results_table(results: List[VariantResult]):
    """Print totals and averages in seconds, with each variant's ratio to the specialized sort."""
    base = {r.element_type: r.stats.mean for r in results
            if r.path == SPECIALIZED and r.stats.n > 0}

    hdr = (f"{'Variant':<18} {'Total (s)':>12} {'Average (s)':>12} {'Median':>10} "
           f"{'Min':>10} {'Max':>10} {'vs Spec':>8} {'Status':>7}")
    print(f"{Colors.BOLD}{hdr}{Colors.END}")
    print("-" * len(hdr))

    for r in results:
        if r.stats.n == 0 or not r.correct:
            print(f"{r.variant:<18} {'-':>12} {'-':>12} {'-':>10} {'-':>10} {'-':>10} "
                  f"{'-':>8} {Colors.RED}FAIL{Colors.END}")
            continue

        s = r.stats
        b = base.get(r.element_type)
        ratio = f"{s.mean/b:.2f}x" if b else "-"
        if not b or s.mean <= b * 1.1:
            clr = Colors.GREEN
        elif s.mean <= b * 2:
            clr = Colors.YELLOW
        else:
            clr = Colors.RED

        print(f"{r.variant:<18} {s.total:>12.6f} {s.mean:>12.6f} {fmt_time(s.median):>10} "
              f"{fmt_time(s.min_val):>10} {fmt_time(s.max_val):>10} "
              f"{clr}{ratio:>8}{Colors.END} {Colors.GREEN}{'OK':>7}{Colors.END}")
