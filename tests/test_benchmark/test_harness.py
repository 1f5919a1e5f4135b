# tests/test_benchmark/test_harness.py


###### IMPORT TOOLS ######
# global imports
import pytest

# local imports
from apps.benchmark.src.data.engines import QueryResult
from apps.benchmark.src.domain.test_cases import BenchmarkTestCase
from apps.benchmark.src.service.harness import BenchmarkHarness


###### FAKES ######
class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class FakeEngine:
    """Advances the shared clock by a scripted latency per execution."""

    def __init__(self, name, clock, latencies_ms, calls, fail_on=None):
        self.name = name
        self._clock = clock
        self._latencies = list(latencies_ms)
        self._calls = calls
        self._fail_on = fail_on
        self.executed = 0

    async def execute(self, query):
        self.executed += 1
        self._calls.append((self.name, query))
        if self._fail_on is not None and self.executed == self._fail_on:
            raise RuntimeError(f"{self.name} query failed")
        self._clock.now += self._latencies.pop(0) / 1000
        return QueryResult(columns=["count"], rows=[("1",)])


def _case(name="Count all", runs=3):
    return BenchmarkTestCase(name=name, athena_query=f"athena:{name}", timestream_query=f"ts:{name}", runs=runs)


###### TESTS ######
@pytest.mark.asyncio
async def test_metrics_per_engine(quiet_logger):
    clock, calls = FakeClock(), []
    athena = FakeEngine("Athena", clock, [10, 20, 30], calls)
    timestream = FakeEngine("TimeStream", clock, [5, 5, 5], calls)

    [result] = await BenchmarkHarness(athena, timestream, quiet_logger, clock=clock).run([_case()])

    assert result.name == "Count all"
    assert list(result.metrics) == ["Athena", "TimeStream"]
    a, t = result.metrics["Athena"], result.metrics["TimeStream"]
    assert (a.min, a.max, a.avg, a.std_dev) == (10, 30, 20, 8)
    assert a.requests == [10, 20, 30]
    assert (t.min, t.max, t.avg, t.std_dev) == (5, 5, 5, 0)


@pytest.mark.asyncio
async def test_runs_alternate_engines_sequentially(quiet_logger):
    clock, calls = FakeClock(), []
    athena = FakeEngine("Athena", clock, [1] * 4, calls)
    timestream = FakeEngine("TimeStream", clock, [1] * 4, calls)

    await BenchmarkHarness(athena, timestream, quiet_logger, clock=clock).run(
        [_case("first", runs=2), _case("second", runs=2)]
    )

    assert calls == [
        ("Athena", "athena:first"),
        ("TimeStream", "ts:first"),
        ("Athena", "athena:first"),
        ("TimeStream", "ts:first"),
        ("Athena", "athena:second"),
        ("TimeStream", "ts:second"),
        ("Athena", "athena:second"),
        ("TimeStream", "ts:second"),
    ]


@pytest.mark.asyncio
async def test_query_failure_aborts_the_benchmark(quiet_logger):
    clock, calls = FakeClock(), []
    athena = FakeEngine("Athena", clock, [1] * 10, calls)
    timestream = FakeEngine("TimeStream", clock, [1] * 10, calls, fail_on=2)
    harness = BenchmarkHarness(athena, timestream, quiet_logger, clock=clock)

    with pytest.raises(RuntimeError, match="TimeStream query failed"):
        await harness.run([_case("first", runs=3), _case("second", runs=3)])

    assert ("Athena", "athena:second") not in calls
    assert athena.executed == 2
