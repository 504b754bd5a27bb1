"""Batched pool discovery through factory contracts."""

from ammsim.discovery.factory import (
    AnyFactory,
    AutomatedMarketMakerFactory,
    ConstantProductFactory,
    HybridFactory,
)
from ammsim.discovery.paging import gather_pages, page_windows

__all__ = [
    "AnyFactory",
    "AutomatedMarketMakerFactory",
    "ConstantProductFactory",
    "HybridFactory",
    "gather_pages",
    "page_windows",
]
