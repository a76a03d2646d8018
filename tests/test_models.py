import dataclasses

import pytest

from schedsim.errors import MalformedInput, SchedulerError
from schedsim.models import Process, ScheduledSlice


def test_priority_defaults_to_zero():
    assert Process(1, arrival_time=0, burst_time=3).priority == 0


def test_process_is_immutable():
    p = Process(1, 0, 3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.burst_time = 4


@pytest.mark.parametrize("burst", [0, -2])
def test_non_positive_burst_rejected(burst):
    with pytest.raises(MalformedInput):
        Process(1, 0, burst)


def test_negative_arrival_rejected():
    with pytest.raises(MalformedInput):
        Process(1, -1, 3)


@pytest.mark.parametrize("value", ["3", 2.5, True, None])
def test_non_integer_fields_rejected(value):
    with pytest.raises(MalformedInput):
        Process(1, 0, value)


def test_errors_are_value_errors():
    assert issubclass(MalformedInput, SchedulerError)
    assert issubclass(SchedulerError, ValueError)


def test_slice_duration():
    assert ScheduledSlice(pid=4, start_time=3, end_time=7).duration == 4
