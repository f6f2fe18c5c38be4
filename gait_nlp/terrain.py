class FlatGround:
	"""
	Terrain with constant height.
	"""

	def __init__(self, height: float = 0.0):
		self.height = height

	def get_height(self, x: float, y: float) -> float:
		return self.height
