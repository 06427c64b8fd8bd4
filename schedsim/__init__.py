"""
CPU scheduling simulator.

Runs FCFS, shortest-remaining-time-first and preemptive priority policies
over a fixed workload and reports per-process timing plus a Gantt timeline.
"""

__all__ = ["cli"]
