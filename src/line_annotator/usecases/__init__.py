from .annotating_writer import LineAnnotatingWriter
from .pump import pump

__all__ = ["LineAnnotatingWriter", "pump"]
