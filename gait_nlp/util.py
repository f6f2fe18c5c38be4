import numpy as np


# samples and segment lookups closer than this to a boundary count as on the boundary
TIME_EPSILON = 1e-5


def find_active_interval(durations, t) -> tuple[int, float]:
    """
    Find the interval of a chain of consecutive durations that contains time t.
    t is clamped into [0, sum(durations)].
    A time exactly on the border between two intervals belongs to the later interval,
    the total time itself belongs to the last interval.
    :return: index of the interval, time relative to the start of that interval
    """
    assert len(durations) > 0, "need at least one interval"
    total = float(sum(durations))
    t = min(max(float(t), 0.0), total)

    t_start = 0.0
    for i, duration in enumerate(durations):
        t_end = t_start + duration
        if t < t_end:
            return i, t - t_start
        t_start = t_end
    # t == total
    last = len(durations) - 1
    return last, float(durations[last])


def get_interval_start_times(durations) -> np.ndarray:
    """
    Start time of each interval followed by the end time of the last interval.
    """
    return np.concatenate([[0.0], np.cumsum(durations)])
