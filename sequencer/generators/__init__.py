"""
Language-specific sequence generators
"""
from .traversal_state import CancellationToken, TraversalState
from .base_generator import BaseSequenceGenerator
from .python_generator import PythonSequenceGenerator
from .java_generator import JavaSequenceGenerator
from .coordinator import SequenceCoordinator

__all__ = [
    'CancellationToken',
    'TraversalState',
    'BaseSequenceGenerator',
    'PythonSequenceGenerator',
    'JavaSequenceGenerator',
    'SequenceCoordinator',
]
