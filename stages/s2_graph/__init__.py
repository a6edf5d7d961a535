"""Stage 2: Computation graph"""

from .builder import GraphBuilder

__all__ = ["GraphBuilder"]
