"""Pool type definitions.

Provides the AnyPool union, the closed set of pool variants the engine
dispatches over.
"""

from typing import TypeAlias

from ammsim.amm.constant_product import ConstantProductPool
from ammsim.amm.hybrid import HybridPool

# Union type for all pool types
AnyPool: TypeAlias = ConstantProductPool | HybridPool

__all__ = ["AnyPool", "ConstantProductPool", "HybridPool"]
