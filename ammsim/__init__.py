"""Off-chain AMM pool pricing and swap simulation engine."""

from ammsim.discovery import ConstantProductFactory, HybridFactory
from ammsim.pools import AnyPool, ConstantProductPool, HybridPool, calculate_price, simulate_swap

__version__ = "0.1.0"
__all__ = [
    "AnyPool",
    "ConstantProductPool",
    "HybridPool",
    "ConstantProductFactory",
    "HybridFactory",
    "calculate_price",
    "simulate_swap",
    "__version__",
]
