"""
Repository parsing
"""
from .repository_scanner import RepositoryScanner

__all__ = [
    'RepositoryScanner',
]
