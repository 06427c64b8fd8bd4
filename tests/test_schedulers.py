import pytest

from schedsim.algorithms import (
    ALGORITHMS,
    ReadyHeap,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_srtf,
)
from schedsim.errors import UnknownAlgorithmError
from schedsim.models import Process


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
        Process(3, arrival_time=2, burst_time=8, priority=3),
    ]


def _mixed():
    return [
        Process(1, arrival_time=0, burst_time=7, priority=3),
        Process(2, arrival_time=2, burst_time=4, priority=1),
        Process(3, arrival_time=4, burst_time=1, priority=2),
        Process(4, arrival_time=5, burst_time=4, priority=1),
        Process(5, arrival_time=20, burst_time=3, priority=0),
    ]


def _spans(result):
    return [(s.pid, s.start_time, s.end_time) for s in result.timeline]


def test_fcfs_scenario():
    procs = [
        Process(1, arrival_time=0, burst_time=4),
        Process(2, arrival_time=1, burst_time=3),
        Process(3, arrival_time=2, burst_time=2),
    ]
    res = schedule_fcfs(procs)
    assert _spans(res) == [(1, 0, 4), (2, 4, 7), (3, 7, 9)]
    assert [p.waiting_time for p in res.processes] == [0, 3, 5]
    assert [p.turnaround_time for p in res.processes] == [4, 6, 7]
    assert [p.completion_time for p in res.processes] == [4, 7, 9]
    assert res.system.avg_waiting == pytest.approx(2.667, abs=1e-3)
    assert res.system.avg_turnaround == pytest.approx(5.667, abs=1e-3)
    assert res.system.throughput == pytest.approx(0.333, abs=1e-3)


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [s.pid for s in res.timeline] == [1, 2, 3]
    assert res.processes[0].waiting_time == 0
    assert res.processes[1].waiting_time == 4
    assert res.processes[2].waiting_time == 6


def test_fcfs_keeps_input_order():
    procs = [
        Process(1, arrival_time=3, burst_time=2),
        Process(2, arrival_time=0, burst_time=1),
    ]
    res = schedule_fcfs(procs)
    # Not re-sorted by arrival: P2 waits behind P1 even though it arrived first.
    assert _spans(res) == [(1, 3, 5), (2, 5, 6)]
    assert [p.waiting_time for p in res.processes] == [0, 5]
    assert res.system.throughput == pytest.approx(2 / 6)


def test_fcfs_later_zero_arrival_waits_for_cpu():
    procs = [
        Process(1, arrival_time=0, burst_time=4),
        Process(2, arrival_time=0, burst_time=3),
    ]
    res = schedule_fcfs(procs)
    assert _spans(res) == [(1, 0, 4), (2, 4, 7)]
    assert [p.waiting_time for p in res.processes] == [0, 4]


def test_fcfs_idle_gap():
    procs = [
        Process(1, arrival_time=0, burst_time=2),
        Process(2, arrival_time=5, burst_time=2),
    ]
    res = schedule_fcfs(procs)
    assert _spans(res) == [(1, 0, 2), (2, 5, 7)]
    assert [p.waiting_time for p in res.processes] == [0, 0]


def test_srtf_scenario():
    procs = [
        Process(1, arrival_time=0, burst_time=5),
        Process(2, arrival_time=1, burst_time=2),
    ]
    res = schedule_srtf(procs)
    assert _spans(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 7)]
    assert [p.waiting_time for p in res.processes] == [2, 0]
    assert [p.turnaround_time for p in res.processes] == [7, 2]
    assert [p.completion_time for p in res.processes] == [7, 3]
    assert res.system.throughput == pytest.approx(2 / 7)


def test_srtf_preempts_for_shorter():
    res = schedule_srtf(_procs())
    assert _spans(res) == [(1, 0, 1), (2, 1, 4), (1, 4, 8), (3, 8, 16)]
    assert [p.waiting_time for p in res.processes] == [3, 0, 6]


def test_srtf_tie_goes_to_first_listed():
    procs = [
        Process(2, arrival_time=1, burst_time=2),
        Process(1, arrival_time=0, burst_time=3),
    ]
    res = schedule_srtf(procs)
    # At t=1 both have 2 units left; the first entry in the input wins.
    assert _spans(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 5)]


def test_srtf_running_process_keeps_cpu_on_tie_when_listed_first():
    procs = [
        Process(1, arrival_time=0, burst_time=3),
        Process(2, arrival_time=1, burst_time=2),
    ]
    res = schedule_srtf(procs)
    assert _spans(res) == [(1, 0, 3), (2, 3, 5)]


def test_srtf_idle_start():
    res = schedule_srtf([Process(1, arrival_time=2, burst_time=1)])
    assert _spans(res) == [(1, 2, 3)]
    assert res.processes[0].waiting_time == 0
    assert res.processes[0].completion_time == 3


def test_priority_static():
    res = schedule_priority(_procs())
    # P2 has highest priority (1) and preempts P1 as soon as it arrives.
    assert _spans(res) == [(1, 0, 1), (2, 1, 4), (1, 4, 8), (3, 8, 16)]
    assert [p.waiting_time for p in res.processes] == [3, 0, 6]
    assert [p.turnaround_time for p in res.processes] == [8, 3, 14]
    assert res.system.throughput == pytest.approx(3 / 16)


def test_priority_preemption_and_resume():
    procs = [
        Process(1, arrival_time=0, burst_time=4, priority=3),
        Process(2, arrival_time=1, burst_time=2, priority=1),
    ]
    res = schedule_priority(procs)
    assert _spans(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 6)]
    assert [p.waiting_time for p in res.processes] == [2, 0]


def test_priority_ties_follow_arrival_order():
    procs = [
        Process(1, arrival_time=0, burst_time=3, priority=1),
        Process(2, arrival_time=0, burst_time=2, priority=1),
    ]
    res = schedule_priority(procs)
    assert _spans(res) == [(1, 0, 3), (2, 3, 5)]


def test_priority_clock_starts_at_earliest_arrival():
    procs = [
        Process(1, arrival_time=3, burst_time=2, priority=0),
        Process(2, arrival_time=0, burst_time=2, priority=5),
    ]
    res = schedule_priority(procs)
    assert _spans(res) == [(2, 0, 2), (1, 3, 5)]
    # Metrics stay in input order.
    assert [p.pid for p in res.processes] == [1, 2]
    assert [p.waiting_time for p in res.processes] == [0, 0]


def test_priority_idle_gap():
    procs = [
        Process(1, arrival_time=0, burst_time=2),
        Process(2, arrival_time=5, burst_time=1),
    ]
    res = schedule_priority(procs)
    assert _spans(res) == [(1, 0, 2), (2, 5, 6)]
    assert res.system.throughput == pytest.approx(2 / 6)


def test_ready_heap_orders_by_priority_then_rank():
    heap = ReadyHeap()
    heap.push(2, 0, 10)
    heap.push(1, 2, 11)
    heap.push(1, 1, 12)
    assert len(heap) == 3
    assert heap.pop() == (1, 12)
    assert heap.pop() == (2, 11)
    assert heap.pop() == (0, 10)
    assert len(heap) == 0


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_timing_identities(name):
    procs = _mixed()
    res = run_algorithm(name, procs)
    by_pid = {p.pid: p for p in procs}
    assert [m.pid for m in res.processes] == [p.pid for p in procs]
    for m in res.processes:
        p = by_pid[m.pid]
        assert m.turnaround_time == p.burst_time + m.waiting_time
        assert m.completion_time == p.arrival_time + m.waiting_time + p.burst_time
        assert m.waiting_time >= 0


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_timeline_is_well_formed(name):
    procs = _mixed()
    res = run_algorithm(name, procs)
    timeline = res.timeline
    assert all(s.start_time < s.end_time for s in timeline)
    for prev, nxt in zip(timeline, timeline[1:]):
        assert prev.end_time <= nxt.start_time
        assert prev.pid != nxt.pid
    assert sum(s.end_time - s.start_time for s in timeline) == sum(p.burst_time for p in procs)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_rerun_is_identical(name):
    first = run_algorithm(name, _mixed())
    second = run_algorithm(name, _mixed())
    assert first == second


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_single_process(name):
    res = run_algorithm(name, [Process(7, arrival_time=0, burst_time=4, priority=2)])
    assert res.processes[0].waiting_time == 0
    assert res.processes[0].completion_time == 4
    assert _spans(res) == [(7, 0, 4)]


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_empty_workload(name):
    res = run_algorithm(name, [])
    assert res.timeline == []
    assert res.processes == []
    assert res.system.throughput == 0.0


def test_input_not_mutated():
    procs = _procs()
    snapshot = list(procs)
    for name in ALGORITHMS:
        run_algorithm(name, procs)
    assert procs == snapshot


def test_run_algorithm_case_insensitive():
    assert run_algorithm("SRTF", _procs()).algorithm == "Shortest-remaining-time-first"


def test_run_algorithm_unknown():
    with pytest.raises(UnknownAlgorithmError):
        run_algorithm("rr", _procs())


def test_fcfs_repeated_id_after_idle_gap():
    procs = [
        Process(1, arrival_time=0, burst_time=2),
        Process(1, arrival_time=5, burst_time=2),
    ]
    res = schedule_fcfs(procs)
    assert _spans(res) == [(1, 0, 2), (1, 5, 7)]
    assert sum(e - s for _, s, e in _spans(res)) == 4
