import sys
from ast import literal_eval
from pathlib import Path

import numpy as np
import yaml

from gait_nlp.state import RobotStateCartesian
from gait_nlp.variables.composite import VariableComposite


# better store np arrays
def ndarray_representer(dumper: yaml.Dumper, array: np.ndarray) -> yaml.Node:
	return dumper.represent_scalar(
		'!np',
		np.array2string(array, separator=', ', precision=100, threshold=sys.maxsize),
		style='|'
	)

def ndarray_constructor(loader: yaml.Loader, node):
	arr_str = loader.construct_scalar(node)
	return np.array(literal_eval(arr_str))

yaml.add_representer(np.ndarray, ndarray_representer)
yaml.add_constructor('!np', ndarray_constructor)
yaml.add_constructor('!np', ndarray_constructor, Loader=yaml.SafeLoader)




def serialize_variables(variables: VariableComposite) -> dict:
	"""
	Values of each variable block by id.
	"""
	return {c.name: c.get_values() for c in variables.get_variable_components()}


def load_variables(variables: VariableComposite, variables_values_dict: dict):
	"""
	Set the variable blocks to previously serialized values.
	Each variable block of the composite needs an entry in variables_values_dict.
	"""
	for c in variables.get_variable_components():
		assert c.name in variables_values_dict, f"no serialized values for variable block '{c.name}'"
		c.set_values(np.asarray(variables_values_dict[c.name], dtype=float))


def serialize_trajectory(trajectory: list[RobotStateCartesian]) -> list[dict]:
	states = []
	for s in trajectory:
		states.append(dict(
			t=float(s.t_global),
			base_lin=dict(p=np.array(s.base.lin.p), v=np.array(s.base.lin.v), a=np.array(s.base.lin.a)),
			base_ang=dict(q=np.array(s.base.ang.q), w=np.array(s.base.ang.w), wd=np.array(s.base.ang.wd)),
			ee_motion=[np.array(m.p) for m in s.ee_motion],
			ee_forces=[np.array(f) for f in s.ee_forces],
			ee_contact=list(s.ee_contact),
		))
	return states


def save_yaml(data, file_path: str | Path):
	Path(file_path).parent.mkdir(parents=True, exist_ok=True)
	with open(file_path, 'w') as f:
		yaml.dump(data, f, indent=2)

def load_yaml(file_path: str | Path):
	with open(file_path, 'r') as f:
		return yaml.load(f, Loader=yaml.Loader)
