from dataclasses import dataclass, field

import numpy as np


def _frozen_array(value, size=3) -> np.ndarray:
    array = np.array(value if value is not None else np.zeros(size), dtype=float).reshape(-1)
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class StateLin3d:
    """
    Position, velocity and acceleration of a point (or a set of euler angles).
    """
    p: np.ndarray = None
    v: np.ndarray = None
    a: np.ndarray = None

    def __post_init__(self):
        # dataclass is frozen, so bypass __setattr__
        object.__setattr__(self, 'p', _frozen_array(self.p))
        object.__setattr__(self, 'v', _frozen_array(self.v, self.p.shape[0]))
        object.__setattr__(self, 'a', _frozen_array(self.a, self.p.shape[0]))


@dataclass(frozen=True)
class StateAng3d:
    """
    Orientation as quaternion (scipy order x, y, z, w), angular velocity and acceleration in world frame.
    """
    q: np.ndarray = None
    w: np.ndarray = None
    wd: np.ndarray = None

    def __post_init__(self):
        object.__setattr__(self, 'q', _frozen_array(self.q if self.q is not None else [0, 0, 0, 1], 4))
        object.__setattr__(self, 'w', _frozen_array(self.w))
        object.__setattr__(self, 'wd', _frozen_array(self.wd))


@dataclass(frozen=True)
class BaseState:
    lin: StateLin3d = field(default_factory=StateLin3d)
    ang: StateLin3d | StateAng3d = field(default_factory=StateLin3d)


@dataclass(frozen=True)
class RobotStateCartesian:
    """
    Snapshot of the whole robot at time t_global.
    Per end-effector lists are ordered by end-effector id.
    """
    t_global: float
    base: BaseState
    ee_motion: tuple[StateLin3d, ...]
    ee_forces: tuple[np.ndarray, ...]
    ee_contact: tuple[bool, ...]

    def __post_init__(self):
        object.__setattr__(self, 'ee_motion', tuple(self.ee_motion))
        object.__setattr__(self, 'ee_forces', tuple(_frozen_array(f) for f in self.ee_forces))
        object.__setattr__(self, 'ee_contact', tuple(bool(c) for c in self.ee_contact))

    def get_ee_count(self) -> int:
        return len(self.ee_contact)
