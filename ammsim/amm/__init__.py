"""Pool models: constant-product and hybrid (volatile/stable)."""

from ammsim.amm.base import AutomatedMarketMaker
from ammsim.amm.constant_product import ConstantProductPool, get_amount_out
from ammsim.amm.hybrid import HybridFees, HybridPool
from ammsim.amm.stable_math import get_y, stable_get_amount_out

__all__ = [
    # Capability contract
    "AutomatedMarketMaker",
    # Constant product
    "ConstantProductPool",
    "get_amount_out",
    # Hybrid
    "HybridFees",
    "HybridPool",
    "get_y",
    "stable_get_amount_out",
]
