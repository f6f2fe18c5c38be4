"""
Ids under which the variable blocks are stored in a VariableComposite.
"""

base_linear = "base_lin"
base_angular = "base_ang"

ee_schedule = "ee_schedule_"
ee_motion = "ee_motion_"
ee_force = "ee_force_"


def get_ee_schedule_id(ee: int) -> str:
	return ee_schedule + str(ee)

def get_ee_motion_id(ee: int) -> str:
	return ee_motion + str(ee)

def get_ee_force_id(ee: int) -> str:
	return ee_force + str(ee)

def get_coeff_poly_id(spline_id: str, poly: int) -> str:
	# coefficients of each polynomial of a coefficient spline are an own block
	return spline_id + str(poly)
