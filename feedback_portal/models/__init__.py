from .officer import MAX_ID, Officer
from .feedback import Feedback

__all__ = ["Officer", "Feedback", "MAX_ID"]
