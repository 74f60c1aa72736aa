"""
Call-site resolution
"""
from .oracle import ResolutionOracle
from .symbol_index import SymbolIndex

__all__ = [
    'ResolutionOracle',
    'SymbolIndex',
]
