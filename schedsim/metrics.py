from __future__ import annotations

from typing import List, Sequence

from .models import Process, ProcessMetrics, ScheduleResult, SystemMetrics


def compute_process_metrics(
    processes: Sequence[Process], waiting_times: Sequence[int]
) -> List[ProcessMetrics]:
    """
    Derive turnaround and completion from each process's waiting time.

    turnaround = burst + waiting, completion = arrival + waiting + burst.
    """
    if len(processes) != len(waiting_times):
        raise ValueError("need exactly one waiting time per process")

    metrics: List[ProcessMetrics] = []
    for p, waiting_time in zip(processes, waiting_times):
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=p.burst_time + waiting_time,
                completion_time=p.arrival_time + waiting_time + p.burst_time,
            )
        )
    return metrics


def compute_system_metrics(result: ScheduleResult, reference_completion: int) -> SystemMetrics:
    """
    Compute averages and throughput for a populated result.

    Throughput divides by ``reference_completion``, which each policy picks:
    FCFS passes the completion of the last process it dispatched, the
    preemptive policies pass the latest completion overall.
    """
    summary = summarize_process_metrics(result.processes)
    n = len(result.processes)
    throughput = n / reference_completion if reference_completion > 0 else 0.0

    system = SystemMetrics(
        avg_waiting=summary["avg_waiting"],
        avg_turnaround=summary["avg_turnaround"],
        throughput=throughput,
    )
    result.system = system
    return system


def latest_completion(processes: Sequence[ProcessMetrics]) -> int:
    return max((p.completion_time for p in processes), default=0)


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
    }
