"""
Base extractor class for language-specific declaration extractors
"""
from abc import ABC, abstractmethod

from sequencer.models.declaration import DeclarationKind, Scope, SourceDeclaration


class BaseExtractor(ABC):
    """
    Abstract base class for language-specific extractors
    """

    language = None

    @abstractmethod
    def extract(self, root_node, source_code, filepath):
        """
        Extract declarations from AST

        Args:
            root_node: Tree-sitter root node
            source_code: Source code bytes
            filepath: Relative file path

        Returns:
            List of SourceDeclaration objects found in this file
        """
        pass

    def _declaration(self, node, name, kind, source_code, filepath, scope, owner=None, generics=()):
        return SourceDeclaration(
            name=name,
            kind=kind,
            language=self.language,
            filepath=filepath,
            node=node,
            source=source_code,
            scope=scope,
            owner=owner,
            generics=generics,
        )

    @staticmethod
    def _push_children(pending, node, *context):
        """Queue node's children on a last-in-first-out work-list so they pop in source order"""
        for child in reversed(node.children):
            pending.append((child,) + context)

    @staticmethod
    def _scope(owner, nested):
        """MEMBER inside a type, LOCAL inside a function body, else TOP_LEVEL"""
        if owner:
            return Scope.MEMBER
        if nested:
            return Scope.LOCAL
        return Scope.TOP_LEVEL

    @staticmethod
    def _kind(is_constructor):
        return DeclarationKind.PRIMARY_CONSTRUCTOR if is_constructor else DeclarationKind.NAMED_FUNCTION

    @staticmethod
    def _text(source_code, node):
        return source_code[node.start_byte:node.end_byte].decode('utf-8', errors='replace')
