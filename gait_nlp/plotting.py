import numpy as np
from matplotlib import pyplot as plt

from gait_nlp.state import RobotStateCartesian


def get_contact_intervals(t_vals: np.ndarray, in_contact: np.ndarray) -> list[tuple[float, float]]:
	"""
	(start, end) times of consecutive samples that are in contact.
	"""
	intervals = []
	start = None
	for t, c in zip(t_vals, in_contact):
		if c and start is None:
			start = t
		elif not c and start is not None:
			intervals.append((start, t))
			start = None
	if start is not None:
		intervals.append((start, t_vals[-1]))
	return intervals


def plot_robot_trajectory(trajectory: list[RobotStateCartesian], show_plot=True, title=None):
	"""
	Plot base position, foot height and foot normal force over time, contact phases are shaded.
	"""
	t_vals = np.array([s.t_global for s in trajectory])
	base_pos = np.array([s.base.lin.p for s in trajectory])
	ee_count = trajectory[0].get_ee_count()

	fig, axes = plt.subplots(1 + ee_count, 1, sharex=True, figsize=(8, 2 + 2*ee_count))
	ax_base = axes[0]
	for dim, label in enumerate(['x', 'y', 'z']):
		ax_base.plot(t_vals, base_pos[:, dim], label=f'base {label}')
	ax_base.set_ylabel('base pos [m]')
	ax_base.legend(loc='upper right')
	if title is not None:
		ax_base.set_title(title)

	for ee in range(ee_count):
		ax = axes[1 + ee]
		foot_z = np.array([s.ee_motion[ee].p[2] for s in trajectory])
		force_z = np.array([s.ee_forces[ee][2] for s in trajectory])
		in_contact = np.array([s.ee_contact[ee] for s in trajectory])

		ax.plot(t_vals, foot_z, label='foot z', c='tab:blue')
		ax.set_ylabel(f'ee {ee} z [m]')
		ax_force = ax.twinx()
		ax_force.plot(t_vals, force_z, label='force z', c='tab:red')
		ax_force.set_ylabel('force z [N]')
		for start, end in get_contact_intervals(t_vals, in_contact):
			ax.axvspan(start, end, color='gray', alpha=0.2)

	axes[-1].set_xlabel('t [s]')
	fig.tight_layout()
	if show_plot:
		plt.show()
	return fig
