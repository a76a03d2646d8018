from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for every error raised by the simulator."""


class InvalidArguments(SchedulerError):
    """Wrong command-line arity or an unknown algorithm name."""


class MalformedInput(SchedulerError):
    """A process record is missing a field, is not an integer or is out of range."""


class EmptyProcessSet(SchedulerError):
    """An algorithm or summary was asked to work on zero processes."""


class InvalidQuantum(SchedulerError):
    """Round-robin was given a non-positive time quantum."""
