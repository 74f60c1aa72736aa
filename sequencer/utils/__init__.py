"""
Utility modules
"""
from .language_detector import LanguageDetector
from .node_search import NodeSearch
from .report_printer import ReportPrinter

__all__ = [
    'LanguageDetector',
    'NodeSearch',
    'ReportPrinter'
]
