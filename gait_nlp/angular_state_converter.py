import numpy as np
from scipy.spatial.transform import Rotation

from gait_nlp.state import StateLin3d, StateAng3d


def E_euler_rates_to_angular_vel(euler_angles):
    """
    Get Matrix to map (global) euler angle (change) rates to (global) angular velocity.
    :param euler_angles: euler angles (roll, pitch, yaw)
    :return: Transform matrix
    """
    # rotations: here we use Z-Y-X order Euler angles
    #   φ = around x-axis
    #   θ = around y-axis
    #   ψ = around z-axis
    sin_y = np.sin(euler_angles[1])
    cos_y = np.cos(euler_angles[1])
    sin_z = np.sin(euler_angles[2])
    cos_z = np.cos(euler_angles[2])
    return np.array([
        [cos_y*cos_z,   -sin_z,     0],
        [cos_y*sin_z,   cos_z,      0],
        [-sin_y,        0,          1],
    ])


def E_euler_rates_to_angular_vel__dangleY(euler_angles):
    r"""
    Get derivative by the y-angle of the Matrix which maps (global) euler angle (change) rates to (global) angular velocity.
    See $$\frac{\partial E}{\partial \theta}$$ in "Representing Attitude: Euler Angles, Unit Quaternions, and Rotation" p. 24.
    """
    sin_y = np.sin(euler_angles[1])
    cos_y = np.cos(euler_angles[1])
    sin_z = np.sin(euler_angles[2])
    cos_z = np.cos(euler_angles[2])
    return np.array([
        [-cos_z*sin_y,      0,     0],
        [-sin_z*sin_y,      0,     0],
        [-cos_y,            0,     0],
    ])


def E_euler_rates_to_angular_vel__dangleZ(euler_angles):
    r"""
    Get derivative by the z-angle of the Matrix which maps (global) euler angle (change) rates to (global) angular velocity.
    See $$\frac{\partial E}{\partial \psi}$$ in "Representing Attitude: Euler Angles, Unit Quaternions, and Rotation" p. 24.
    """
    sin_y = np.sin(euler_angles[1])
    cos_y = np.cos(euler_angles[1])
    sin_z = np.sin(euler_angles[2])
    cos_z = np.cos(euler_angles[2])
    return np.array([
        [-cos_y*sin_z,      -cos_z,     0],
        [cos_y*cos_z,       -sin_z,     0],
        [0,                 0,          0],
    ])


class AngularStateConverter:
    """
    Converts euler angles (roll, pitch, yaw in Z-Y-X order) with their derivatives into
    orientation quaternion, angular velocity and angular acceleration in world frame.
    """

    @staticmethod
    def get_quaternion(euler_angles) -> np.ndarray:
        roll, pitch, yaw = euler_angles
        # scipy quaternion order: x, y, z, w
        return Rotation.from_euler('ZYX', [yaw, pitch, roll]).as_quat()

    @staticmethod
    def get_angular_velocity(euler_angles, euler_rates) -> np.ndarray:
        return E_euler_rates_to_angular_vel(euler_angles) @ np.asarray(euler_rates)

    @staticmethod
    def get_angular_acceleration(euler_angles, euler_rates, euler_accelerations) -> np.ndarray:
        euler_rates = np.asarray(euler_rates)
        dE_dt = E_euler_rates_to_angular_vel__dangleY(euler_angles) * euler_rates[1] \
            + E_euler_rates_to_angular_vel__dangleZ(euler_angles) * euler_rates[2]
        return dE_dt @ euler_rates + E_euler_rates_to_angular_vel(euler_angles) @ np.asarray(euler_accelerations)

    @staticmethod
    def get_state(euler: StateLin3d) -> StateAng3d:
        return StateAng3d(
            q=AngularStateConverter.get_quaternion(euler.p),
            w=AngularStateConverter.get_angular_velocity(euler.p, euler.v),
            wd=AngularStateConverter.get_angular_acceleration(euler.p, euler.v, euler.a),
        )
