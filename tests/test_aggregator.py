"""Unit tests for parallel measurement and setup handling."""

import threading
from ipaddress import ip_address

import pytest

from pingcheck.aggregator import measure, ping_all
from pingcheck.fake_prober import ScriptedProber
from pingcheck.models import ProbeSetupError, SamplingError
from pingcheck.sampler import MAX_ATTEMPTS


def fake_streams(*ping_times):
    """One iterator per outcome list."""
    return [iter(list(times)) for times in ping_times]


class TestMeasure:
    """Test measure() over fake outcome streams."""

    def test_empty(self):
        assert measure([], 1.0) == []

    def test_singletons(self):
        times = fake_streams([54.1], [0.2])
        assert measure(times, 1e2) == [54.1, 0.2]

    def test_collect_minimum(self):
        times = fake_streams(
            # middle one
            [54.1, 53.0, 53.5],
            # last one
            [None, 0.3, 0.2],
            # first one
            [1.0, 2.5, 3.0],
            # nothing
            [None, None, None],
        )
        assert measure(times, 1e-2) == [53.0, 0.2, 1.0, None]

    def test_max_attempts(self):
        """The cap, not the cutoff, hides the lower value after the budget."""
        drawn = []

        def stream():
            for value in [4.0] * MAX_ATTEMPTS + [2.0]:
                drawn.append(value)
                yield value

        assert measure([stream()], 1.0) == [4.0]
        assert len(drawn) == MAX_ATTEMPTS

    def test_stop_single_target_below_cutoff(self):
        times = fake_streams([9.0, 8.0, 7.0, 6.0])
        assert measure(times, 8.0) == [7.0]

    def test_multi_cutoff(self):
        times = fake_streams(
            [7.0, 6.0, 5.0, 4.0],
            [8.0, 7.0, 6.0, 5.0],
            # never below cutoff
            [9.0, 8.0, 7.0, 6.0],
        )
        assert measure(times, 5.1) == [5.0, 5.0, 6.0]

    def test_targets_sampled_concurrently(self):
        """Both streams must be inside their first attempt at the same time."""
        barrier = threading.Barrier(2, timeout=10)

        def stream(value):
            barrier.wait()
            yield value

        assert measure([stream(0.3), stream(0.1)], 1.0) == [0.3, 0.1]

    def test_early_stop_does_not_affect_other_targets(self):
        drawn = {"fast": 0, "slow": 0}

        def stream(name, value):
            while True:
                drawn[name] += 1
                yield value

        result = measure([stream("fast", 0.001), stream("slow", 0.5)], 0.01)

        assert result == [0.001, 0.5]
        assert drawn == {"fast": 1, "slow": MAX_ATTEMPTS}

    def test_result_order_matches_input(self):
        times = fake_streams(*[[float(i)] for i in range(20)])
        assert measure(times, 0.0) == [float(i) for i in range(20)]

    def test_broken_stream_raises_after_join(self):
        finished = []

        def broken():
            yield None
            raise RuntimeError("socket closed")

        def healthy():
            yield 0.2
            finished.append(True)

        with pytest.raises(SamplingError, match="target #0") as excinfo:
            measure([broken(), healthy()], 0.01)

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert finished == [True]


class TestPingAll:
    """Test ping_all() stream setup."""

    def test_no_addresses_never_creates_prober(self):
        def factory():
            raise AssertionError("factory must not be called")

        assert ping_all([], 0.05, factory) == []

    def test_scripted_targets(self):
        prober = ScriptedProber({
            "192.0.2.1": [0.08, 0.03, 0.06],
            "2001:db8::1": [None, None],
        })
        addresses = [ip_address("192.0.2.1"), ip_address("2001:db8::1")]

        assert ping_all(addresses, 0.05, lambda: prober) == [0.03, None]
        assert prober.consumed == {"192.0.2.1": 2, "2001:db8::1": 2}

    def test_setup_failure_is_chained(self):
        def factory():
            return ScriptedProber(fail_with=PermissionError(1, "Operation not permitted"))

        with pytest.raises(ProbeSetupError, match="cannot create probe transport") as excinfo:
            ping_all([ip_address("192.0.2.1")], 0.05, factory)

        assert isinstance(excinfo.value.__cause__, PermissionError)

    def test_setup_failure_before_any_probe(self):
        """A failing second transport aborts before the first target is probed."""
        first = ScriptedProber({"192.0.2.1": [0.01]})
        probers = iter([first])

        def factory():
            try:
                return next(probers)
            except StopIteration:
                raise OSError("no more sockets") from None

        addresses = [ip_address("192.0.2.1"), ip_address("192.0.2.2")]
        with pytest.raises(ProbeSetupError):
            ping_all(addresses, 0.05, factory)

        assert first.consumed == {}
