"""
Data model: descriptions, declarations and the call-stack tree
"""
from .description import (
    CONSTRUCTOR_METHOD_NAME,
    ClassDescription,
    MethodDescription,
    create_method_description,
)
from .call_stack import CallStack
from .declaration import CallSite, DeclarationKind, Scope, SourceDeclaration
from .sequence_params import SequenceParams

__all__ = [
    'CONSTRUCTOR_METHOD_NAME',
    'ClassDescription',
    'MethodDescription',
    'create_method_description',
    'CallStack',
    'CallSite',
    'DeclarationKind',
    'Scope',
    'SourceDeclaration',
    'SequenceParams',
]
