import random
import string

import pytest

from benchmark_core import (
    GENERIC,
    REFERENCE,
    SPECIALIZED,
    BenchmarkConfig,
    BenchmarkEngine,
    RandomIntegers,
    RandomStrings,
    ReversedIntegers,
    SortedIntegers,
    SortVariant,
    Statistics,
    fmt_time,
    get_generators,
    get_variants,
    print_results_table,
    run_benchmark,
)
from quicksort import InvalidRange


def _engine(**kw) -> BenchmarkEngine:
    params = dict(trials=3, n=60, seed=7, gc_between_runs=False)
    params.update(kw)
    return BenchmarkEngine(BenchmarkConfig(**params))


def test_statistics_total_and_mean() -> None:
    s = Statistics.from_samples([0.1, 0.2, 0.3, 0.4])
    assert s.n == 4
    assert s.total == pytest.approx(1.0)
    assert s.mean == pytest.approx(0.25)
    assert s.median == pytest.approx(0.25)
    assert s.min_val == 0.1
    assert s.max_val == 0.4
    assert s.std_dev > 0


def test_statistics_empty_and_single() -> None:
    empty = Statistics.from_samples([])
    assert empty.n == 0 and empty.total == 0.0
    one = Statistics.from_samples([2.0])
    assert one.mean == 2.0 and one.std_dev == 0.0


def test_random_integers_bounds() -> None:
    arr = RandomIntegers().generate(500, random.Random(1))
    assert len(arr) == 500
    assert all(type(x) is int and 0 <= x < 500 for x in arr)


def test_random_strings_alphabet_and_length() -> None:
    arr = RandomStrings(max_len=5).generate(300, random.Random(1))
    assert len(arr) == 300
    assert all(1 <= len(s) <= 5 for s in arr)
    assert set("".join(arr)) <= set(string.ascii_lowercase)


def test_random_strings_rejects_bad_max_len() -> None:
    with pytest.raises(ValueError):
        RandomStrings(max_len=0)


def test_ordered_generators() -> None:
    assert SortedIntegers().generate(4, random.Random(0)) == [0, 1, 2, 3]
    assert ReversedIntegers().generate(4, random.Random(0)) == [4, 3, 2, 1]


def test_generators_from_config() -> None:
    names = [g.name for g in get_generators(BenchmarkConfig())]
    assert names == ["random_int", "random_str"]
    names = [g.name for g in get_generators(BenchmarkConfig(distributions=True))]
    assert names == ["random_int", "random_str", "sorted_int", "reversed_int"]


def test_default_variants_pair_generic_with_specialized() -> None:
    variants = get_variants()
    assert list(variants) == ["Generic int", "Specialized int", "Generic str", "Specialized str"]
    by_type = {}
    for v in variants.values():
        by_type.setdefault(v.element_type, set()).add(v.path)
    assert by_type == {int: {GENERIC, SPECIALIZED}, str: {GENERIC, SPECIALIZED}}


def test_reference_variants_sort(rng) -> None:
    variants = get_variants(include_reference=True)
    refs = [v for v in variants.values() if v.path == REFERENCE]
    assert {v.name for v in refs} == {
        "Iterative int", "Iterative str", "Timsort int", "Timsort str", "NumPy int",
    }
    ints = RandomIntegers().generate(200, rng)
    strs = RandomStrings(10).generate(200, rng)
    for v in refs:
        data = ints if v.element_type is int else strs
        a = data[:]
        v(a, rng)
        assert a == sorted(data), v.name


def test_time_once_copies_input() -> None:
    engine = _engine()
    arr = [3, 1, 2]
    t, result = engine.time_once(get_variants()["Generic int"].function, arr)
    assert t >= 0
    assert result == [1, 2, 3]
    assert arr == [3, 1, 2]


def test_verify() -> None:
    engine = _engine()
    assert engine.verify(get_variants()["Specialized int"].function, [2, 1, 3])
    assert not engine.verify(lambda a, rng: None, [2, 1, 3])


def test_compare_times_every_trial() -> None:
    engine = _engine(trials=4)
    results = engine.compare(list(get_variants().values()), RandomIntegers(), 80)
    assert [r.variant for r in results] == ["Generic int", "Specialized int"]
    for r in results:
        assert r.correct
        assert r.stats.n == 4
        assert r.stats.total == pytest.approx(sum(r.stats.raw_values))
        assert r.stats.mean == pytest.approx(r.stats.total / 4)
        assert r.input_type == "random_int"
        assert r.element_type == "int"
        assert r.n == 80


def test_compare_marks_broken_variant() -> None:
    broken = SortVariant("Broken int", lambda a, rng: None, int, GENERIC, "does nothing")
    engine = _engine()
    good, bad = engine.compare(
        [get_variants()["Specialized int"], broken], ReversedIntegers(), 20
    )
    assert good.correct and good.stats.n == 3
    assert not bad.correct and bad.stats.n == 0


def test_compare_propagates_sort_errors() -> None:
    def bad_range(a, rng):
        raise InvalidRange(-1, len(a) - 1, len(a))

    engine = _engine()
    with pytest.raises(InvalidRange):
        engine.compare([SortVariant("Bad", bad_range, int, GENERIC, "")], RandomIntegers(), 10)


def test_sanity_check_covers_both_types() -> None:
    engine = _engine(sanity_len=10)
    results = engine.sanity_check(
        list(get_variants().values()), [RandomIntegers(), RandomStrings(4)]
    )
    assert [r.variant for r in results] == [
        "Generic int", "Specialized int", "Generic str", "Specialized str",
    ]
    for r in results:
        assert r.correct
        assert len(r.before) == 10
        assert r.after == sorted(r.before)


def test_same_seed_replays_data() -> None:
    gens = [RandomIntegers(), RandomStrings(6)]
    a = _engine(seed=3).sanity_check(list(get_variants().values()), gens)
    b = _engine(seed=3).sanity_check(list(get_variants().values()), gens)
    assert [r.before for r in a] == [r.before for r in b]


def test_run_benchmark_all_generators() -> None:
    engine = _engine(trials=2, n=40, max_string_len=8, distributions=True)
    seen = []
    results = run_benchmark(engine, get_variants(), on_result=lambda g, rs: seen.append(g.name))
    assert seen == ["random_int", "random_str", "sorted_int", "reversed_int"]
    assert len(results) == 8
    assert all(r.correct and r.stats.n == 2 for r in results)


def test_result_and_report_serialisable() -> None:
    engine = _engine(trials=2, n=30)
    results = engine.compare(list(get_variants().values()), RandomIntegers(), 30)
    d = results[0].to_dict()
    assert d["stats"]["trials"] == 2
    assert d["stats"]["total_seconds"] == results[0].stats.total


def test_print_results_table(capsys) -> None:
    engine = _engine(trials=2, n=30)
    results = engine.compare(list(get_variants().values()), RandomIntegers(), 30)
    print_results_table(results)
    out = capsys.readouterr().out
    assert "Total (s)" in out
    assert "Average (s)" in out
    assert "Generic int" in out
    assert "Specialized int" in out
    assert "1.00x" in out


@pytest.mark.parametrize(
    "t, expected",
    [(5e-7, "500.0ns"), (2.5e-4, "250.0us"), (0.0125, "12.50ms"), (2.0, "2.000s")],
)
def test_fmt_time(t, expected) -> None:
    assert fmt_time(t) == expected
