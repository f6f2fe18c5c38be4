class ConfigurationError(ValueError):
	"""
	Invalid problem setup, e.g. an unknown base representation or solver.
	Raised while building or solving a problem, never recovered from.
	"""
	pass


class ComponentLookupError(LookupError):
	"""
	A variable block was requested by an id that does not exist
	or the stored block does not have the requested type.
	"""
	pass
