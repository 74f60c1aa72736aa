"""
Java-specific declaration extractor (with enum, interface and record support)
"""
from sequencer.extractors.base_extractor import BaseExtractor
from sequencer.models.declaration import DeclarationKind, Scope

TYPE_DECLARATIONS = ('class_declaration', 'interface_declaration', 'enum_declaration', 'record_declaration')

# Interfaces cannot be instantiated, so only their methods are indexed
INSTANTIABLE_TYPES = ('class_declaration', 'enum_declaration', 'record_declaration')


class JavaExtractor(BaseExtractor):
    """Extract methods, constructors and classes from Java code"""

    language = 'java'

    def extract(self, root_node, source_code, filepath):
        """Extract declarations from Java code"""
        package = self._package_name(root_node, source_code)
        found = []

        # (node, owner, generics, in_method), visited in source order
        pending = [(root_node, None, (), False)]
        while pending:
            node, owner, generics, in_method = pending.pop()

            if node.type in TYPE_DECLARATIONS:
                name_node = node.child_by_field_name('name')
                if not name_node:
                    continue

                type_name = self._text(source_code, name_node)
                scope = self._scope(owner, in_method)
                if scope is Scope.MEMBER:
                    qualified = f"{owner}.{type_name}"
                elif scope is Scope.TOP_LEVEL and package:
                    qualified = f"{package}.{type_name}"
                else:
                    qualified = type_name

                type_generics = self._type_parameters(node, source_code)
                if node.type in INSTANTIABLE_TYPES:
                    found.append(self._declaration(
                        node, type_name, DeclarationKind.CLASS, source_code, filepath,
                        scope, owner=qualified, generics=type_generics,
                    ))

                body = node.child_by_field_name('body')
                if body:
                    self._push_children(pending, body, qualified, type_generics, in_method)

            elif node.type in ('method_declaration', 'constructor_declaration'):
                name_node = node.child_by_field_name('name')
                if not name_node:
                    continue

                # Methods of anonymous classes come out as LOCAL
                kind = self._kind(node.type == 'constructor_declaration')
                found.append(self._declaration(
                    node, self._text(source_code, name_node), kind, source_code, filepath,
                    self._scope(owner, in_method), owner=owner,
                    generics=generics if owner else (),
                ))

                body = node.child_by_field_name('body')
                if body:
                    self._push_children(pending, body, None, (), True)

            else:
                self._push_children(pending, node, owner, generics, in_method)

        return found

    def _package_name(self, root_node, source_code):
        for child in root_node.children:
            if child.type == 'package_declaration':
                for part in child.named_children:
                    if part.type in ('scoped_identifier', 'identifier'):
                        return self._text(source_code, part)
        return None

    def _type_parameters(self, type_node, source_code):
        params_node = type_node.child_by_field_name('type_parameters')
        if params_node is None:
            return ()
        names = []
        for param in params_node.named_children:
            if param.type != 'type_parameter':
                continue
            for part in param.named_children:
                if part.type in ('type_identifier', 'identifier'):
                    names.append(self._text(source_code, part))
                    break
        return tuple(names)
