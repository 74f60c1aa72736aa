"""
Static call-stack reconstruction for sequence diagrams
"""
from sequencer.errors import (
    SequencerError,
    MalformedDeclaration,
    UnsupportedElementError,
    GenerationCancelled,
)
from sequencer.models.call_stack import CallStack
from sequencer.models.description import ClassDescription, MethodDescription
from sequencer.models.sequence_params import SequenceParams
from sequencer.generators.coordinator import SequenceCoordinator

__all__ = [
    'SequencerError',
    'MalformedDeclaration',
    'UnsupportedElementError',
    'GenerationCancelled',
    'CallStack',
    'ClassDescription',
    'MethodDescription',
    'SequenceParams',
    'SequenceCoordinator',
]
