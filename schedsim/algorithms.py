from __future__ import annotations

import heapq
import logging
from typing import Callable, Dict, List, Sequence, Tuple

from .errors import UnknownAlgorithmError
from .gantt import TimelineBuilder
from .metrics import compute_process_metrics, compute_system_metrics, latest_completion
from .models import Process, RemainingWork, ScheduleResult

logger = logging.getLogger(__name__)


def _fcfs_step(service_time: int, p: Process) -> Tuple[int, int, int]:
    """
    One dispatch of FCFS: returns (waiting_time, start_time, new service_time).

    The cursor only moves forward, jumping to the arrival when the CPU
    would otherwise sit idle.
    """
    start_time = max(service_time, p.arrival_time)
    waiting_time = start_time - p.arrival_time
    return waiting_time, start_time, start_time + p.burst_time


def schedule_fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes are dispatched in the order given; the list is not sorted by
    arrival time.
    """
    builder = TimelineBuilder()
    waiting_times: List[int] = []
    service_time = 0

    for p in processes:
        waiting_time, start_time, service_time = _fcfs_step(service_time, p)
        builder.add_slice(p.pid, start_time, service_time)
        waiting_times.append(waiting_time)
        logger.debug("FCFS: P%s runs %d-%d (waited %d)", p.pid, start_time, service_time, waiting_time)

    metrics = compute_process_metrics(processes, waiting_times)
    result = ScheduleResult(algorithm="First-come, first-serve", processes=metrics, timeline=builder.slices)
    # Throughput is measured against the last process dispatched.
    compute_system_metrics(result, metrics[-1].completion_time if metrics else 0)
    return result


def schedule_srtf(processes: Sequence[Process]) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF), simulated one tick at a time.

    Among arrived, unfinished processes the smallest remaining burst runs;
    ties go to the process listed first in the input.
    """
    work = [RemainingWork.for_process(p) for p in processes]
    waiting_times = [0] * len(work)
    builder = TimelineBuilder()

    time = 0
    unfinished = len(work)

    while unfinished:
        ready = [i for i, w in enumerate(work) if w.process.arrival_time <= time and not w.done]
        if not ready:
            # Idle ticks are not recorded; skip straight to the next arrival.
            time = min(w.process.arrival_time for w in work if not w.done)
            continue

        idx = min(ready, key=lambda i: work[i].remaining)
        current = work[idx]

        builder.record_tick(current.process.pid, time)
        current.remaining -= 1
        time += 1
        builder.close_tick(time)

        if current.done:
            unfinished -= 1
            p = current.process
            waiting_times[idx] = max(0, time - p.burst_time - p.arrival_time)
            logger.debug("SRTF: P%s completes at %d", p.pid, time)

    metrics = compute_process_metrics(processes, waiting_times)
    result = ScheduleResult(algorithm="Shortest-remaining-time-first", processes=metrics, timeline=builder.slices)
    compute_system_metrics(result, latest_completion(metrics))
    return result


class ReadyHeap:
    """
    Min-heap of ready processes keyed by priority (lower value runs first).

    Equal priorities are ordered by ``rank``, the process's position in
    arrival order, so ties resolve the same way on every run.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[int, int, int]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, priority: int, rank: int, slot: int) -> None:
        heapq.heappush(self._entries, (priority, rank, slot))

    def pop(self) -> Tuple[int, int]:
        """Remove the most important entry and return its (rank, slot)."""
        _, rank, slot = heapq.heappop(self._entries)
        return rank, slot


def schedule_priority(processes: Sequence[Process]) -> ScheduleResult:
    """
    Preemptive priority scheduling driven by a min-heap.

    Every tick, newly arrived processes join the heap, the most important one
    runs for one unit and goes back on the heap if it still has work left.
    Priorities are static (no aging).
    """
    work = [RemainingWork.for_process(p) for p in processes]
    # Stable sort: equal arrivals keep their input order.
    arrival_order = sorted(range(len(work)), key=lambda i: work[i].process.arrival_time)
    waiting_times = [0] * len(work)
    builder = TimelineBuilder()
    heap = ReadyHeap()

    time = work[arrival_order[0]].process.arrival_time if work else 0
    pushed = 0

    while pushed < len(work) or heap:
        while pushed < len(work) and work[arrival_order[pushed]].process.arrival_time <= time:
            slot = arrival_order[pushed]
            heap.push(work[slot].process.priority, pushed, slot)
            pushed += 1

        if not heap:
            time = work[arrival_order[pushed]].process.arrival_time
            continue

        rank, slot = heap.pop()
        current = work[slot]

        builder.record_tick(current.process.pid, time)
        current.remaining -= 1
        time += 1
        builder.close_tick(time)

        if not current.done:
            heap.push(current.process.priority, rank, slot)
        else:
            p = current.process
            turnaround_time = time - p.arrival_time
            waiting_times[slot] = turnaround_time - p.burst_time
            logger.debug("Priority: P%s completes at %d", p.pid, time)

    metrics = compute_process_metrics(processes, waiting_times)
    result = ScheduleResult(algorithm="Priority", processes=metrics, timeline=builder.slices)
    compute_system_metrics(result, latest_completion(metrics))
    return result


ALGORITHMS: Dict[str, Callable[[Sequence[Process]], ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
}


def run_algorithm(name: str, processes: Sequence[Process]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise UnknownAlgorithmError(f"Unknown or unimplemented algorithm '{name}'")

    logger.info("Running %s on %d processes", key, len(processes))
    func = ALGORITHMS[key]
    return func(processes)
