"""
Language-specific declaration extractors
"""
from .base_extractor import BaseExtractor
from .python_extractor import PythonExtractor
from .java_extractor import JavaExtractor

__all__ = [
    'BaseExtractor',
    'PythonExtractor',
    'JavaExtractor',
]
