"""
Language-neutral descriptions of types and callables
"""
import os
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from sequencer.errors import MalformedDeclaration

CONSTRUCTOR_METHOD_NAME = '<init>'
ANONYMOUS_CLASS_NAME = 'Anonymous'


@dataclass(frozen=True)
class ClassDescription:
    """
    Owning type of a callable: fully qualified name plus its generic parameters
    """
    class_name: str
    generics: Tuple[str, ...] = ()

    def __post_init__(self):
        # Callers are free to pass lists
        object.__setattr__(self, 'generics', tuple(self.generics))

    @property
    def short_name(self):
        return self.class_name.rsplit('.', 1)[-1]

    @property
    def is_anonymous(self):
        return self == ClassDescription.ANONYMOUS_CLASS

    @staticmethod
    def anonymous_class():
        """Shared owner for local functions, local classes and lambdas"""
        return ClassDescription.ANONYMOUS_CLASS

    @staticmethod
    def file_name_as_class(filename):
        """
        Synthetic owner for top-level functions, derived from the file name

        Args:
            filename: Source file name or path (e.g. 'pkg/util.py')

        Returns:
            ClassDescription named after the file ('util_py')
        """
        basename = os.path.basename(filename)
        stem, ext = os.path.splitext(basename)
        if ext:
            basename = f"{stem}_{ext[1:]}"
        return ClassDescription(basename)

    def __str__(self):
        if self.generics:
            return f"{self.class_name}<{', '.join(self.generics)}>"
        return self.class_name


ClassDescription.ANONYMOUS_CLASS = ClassDescription(ANONYMOUS_CLASS_NAME)


@dataclass(frozen=True, eq=False)
class MethodDescription:
    """
    A callable as it appears in a call-stack frame.

    Identity is the owning class, the method name and the parameter types.
    Attributes, parameter names and the return type only describe the frame.
    """
    class_description: ClassDescription
    attributes: Tuple[str, ...]
    method_name: str
    return_type: str
    arg_names: Tuple[str, ...] = field(default=())
    arg_types: Tuple[str, ...] = field(default=())

    @property
    def is_constructor(self):
        return self.method_name == CONSTRUCTOR_METHOD_NAME

    @property
    def signature(self):
        return f"{self.method_name}({', '.join(self.arg_types)})"

    @property
    def full_name(self):
        return f"{self.class_description.class_name}.{self.method_name}"

    def _identity(self):
        return (self.class_description, self.method_name, self.arg_types)

    def __eq__(self, other):
        if not isinstance(other, MethodDescription):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __str__(self):
        return f"{self.class_description.short_name}.{self.signature}"


def create_method_description(
    class_description: ClassDescription,
    attributes: Sequence[str],
    method_name: str,
    return_type: str,
    arg_names: Sequence[str],
    arg_types: Sequence[str],
) -> MethodDescription:
    """
    Build an immutable MethodDescription

    Raises:
        MalformedDeclaration: if arg_names and arg_types differ in length
    """
    arg_names = list(arg_names)
    arg_types = list(arg_types)
    if len(arg_names) != len(arg_types):
        raise MalformedDeclaration(method_name, arg_names, arg_types)

    return MethodDescription(
        class_description=class_description,
        attributes=tuple(attributes),
        method_name=method_name,
        return_type=return_type,
        arg_names=tuple(arg_names),
        arg_types=tuple(arg_types),
    )
