"""
Declaration search utilities
"""
from sequencer.models.declaration import DeclarationKind


class NodeSearch:
    """Search scanned declarations"""

    @staticmethod
    def find_declarations(declarations, name, language=None):
        """
        Search declarations by name

        Args:
            declarations: Iterable of SourceDeclaration objects (or a SymbolIndex)
            name: Simple name, `Owner.name` or fully qualified name
            language: Optional language identifier to restrict the search

        Returns:
            List of matching SourceDeclaration objects, in scan order
        """
        if hasattr(declarations, 'declarations'):
            declarations = declarations.declarations

        results = []
        for declaration in declarations:
            if language and declaration.language != language:
                continue
            if name in NodeSearch._names(declaration):
                results.append(declaration)
        return results

    @staticmethod
    def search_function(declarations, func_name):
        return [
            d for d in NodeSearch.find_declarations(declarations, func_name)
            if d.kind is not DeclarationKind.CLASS
        ]

    @staticmethod
    def search_type(declarations, type_name):
        return [
            d for d in NodeSearch.find_declarations(declarations, type_name)
            if d.kind is DeclarationKind.CLASS
        ]

    @staticmethod
    def _names(declaration):
        names = {declaration.name, declaration.qualified_name}
        if declaration.owner_short_name and declaration.kind is not DeclarationKind.CLASS:
            names.add(f"{declaration.owner_short_name}.{declaration.name}")
        return names
