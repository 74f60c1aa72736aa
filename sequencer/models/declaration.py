"""
Source-level declarations and call sites handed to the generators
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class DeclarationKind(Enum):
    """Declaration kinds the generators know how to enter"""
    NAMED_FUNCTION = 'named_function'
    PRIMARY_CONSTRUCTOR = 'primary_constructor'
    SECONDARY_CONSTRUCTOR = 'secondary_constructor'
    CLASS = 'class'

    @property
    def is_constructor(self):
        return self in (DeclarationKind.PRIMARY_CONSTRUCTOR, DeclarationKind.SECONDARY_CONSTRUCTOR)


class Scope(Enum):
    """Where a declaration lives relative to its file"""
    TOP_LEVEL = 'top_level'
    MEMBER = 'member'
    LOCAL = 'local'


@dataclass(eq=False)
class SourceDeclaration:
    """
    A function, constructor or class found in a parsed source file

    Attributes:
        name: Simple name as written in the source
        kind: DeclarationKind of the node
        language: Language identifier ('python', 'java')
        filepath: Path of the file relative to the scanned root
        node: Tree-sitter node of the declaration
        source: Source bytes the node points into
        scope: TOP_LEVEL, MEMBER or LOCAL
        owner: Qualified name of the enclosing type (classes: their own name)
        generics: Generic parameters of that type
    """
    name: str
    kind: DeclarationKind
    language: str
    filepath: str
    node: object
    source: bytes
    scope: Scope = Scope.TOP_LEVEL
    owner: Optional[str] = None
    generics: Tuple[str, ...] = field(default=())

    @property
    def start_line(self):
        return self.node.start_point[0] + 1

    @property
    def end_line(self):
        return self.node.end_point[0] + 1

    @property
    def owner_short_name(self):
        if not self.owner:
            return None
        return self.owner.rsplit('.', 1)[-1]

    @property
    def qualified_name(self):
        if self.kind is DeclarationKind.CLASS:
            return self.owner or self.name
        if self.owner:
            return f"{self.owner}.{self.name}"
        return self.name

    def text(self, node=None):
        """Source text of node (defaults to the declaration itself)"""
        node = node if node is not None else self.node
        return self.source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')

    def encloses(self, node):
        """True if node lies inside this declaration"""
        return (
            node.start_byte >= self.node.start_byte
            and node.end_byte <= self.node.end_byte
        )

    def __repr__(self):
        return f"<{self.language}:{self.filepath}::{self.qualified_name}:{self.start_line}>"


@dataclass(eq=False)
class CallSite:
    """A call expression together with the declaration whose body holds it"""
    node: object
    caller: SourceDeclaration

    @property
    def language(self):
        return self.caller.language

    @property
    def filepath(self):
        return self.caller.filepath

    def text(self, node=None):
        return self.caller.text(node if node is not None else self.node)
