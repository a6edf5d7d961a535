"""Stage 0: Reception"""

from .receiver import Receiver

__all__ = ["Receiver"]
