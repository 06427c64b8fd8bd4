from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error the simulator reports to the user."""


class InvalidArgumentsError(SchedulerError):
    pass


class FileAccessError(SchedulerError):
    pass


class MalformedInputError(SchedulerError, ValueError):
    """A workload row has the wrong shape or a field that is not an integer."""


class UnknownAlgorithmError(SchedulerError, ValueError):
    pass
