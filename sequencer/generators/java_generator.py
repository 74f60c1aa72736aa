"""
Java-specific sequence generator
"""
from sequencer.generators.base_generator import BaseSequenceGenerator
from sequencer.models.declaration import DeclarationKind

VOID_TYPE = 'void'


class JavaSequenceGenerator(BaseSequenceGenerator):
    """Walk Java method and constructor bodies"""

    language = 'java'

    # explicit_constructor_invocation is this(...) or super(...) in a constructor
    CALL_NODE_TYPES = frozenset({
        'method_invocation',
        'object_creation_expression',
        'explicit_constructor_invocation',
    })

    # class_body covers anonymous classes inside `new Foo() { ... }`
    NESTED_DECLARATION_TYPES = frozenset({
        'class_declaration',
        'interface_declaration',
        'enum_declaration',
        'record_declaration',
        'class_body',
    })

    def body_nodes(self, declaration):
        if declaration.kind is DeclarationKind.CLASS:
            return []
        body = declaration.node.child_by_field_name('body')
        return [body] if body is not None else []

    def extract_parameters(self, declaration):
        arg_names = []
        arg_types = []
        params_node = declaration.node.child_by_field_name('parameters')
        if params_node is None:
            return arg_names, arg_types

        for child in params_node.named_children:
            if child.type == 'formal_parameter':
                type_node = child.child_by_field_name('type')
                name_node = child.child_by_field_name('name')
                arg_type = declaration.text(type_node) if type_node is not None else None
            elif child.type == 'spread_parameter':
                type_node = None
                for part in child.named_children:
                    if part.type not in ('modifiers', 'variable_declarator'):
                        type_node = part
                        break
                declarator = self.child_of_type(child, 'variable_declarator')
                name_node = declarator.child_by_field_name('name') if declarator is not None else None
                arg_type = f"{declaration.text(type_node)}..." if type_node is not None else None
            else:
                # receiver parameters and comments
                continue
            # A missing name or type is reported as a length mismatch
            if name_node is not None:
                arg_names.append(declaration.text(name_node))
            if arg_type is not None:
                arg_types.append(arg_type)
        return arg_names, arg_types

    def return_type(self, declaration):
        type_node = declaration.node.child_by_field_name('type')
        if type_node is None:
            return VOID_TYPE
        return declaration.text(type_node)

    def attributes(self, declaration):
        modifiers = self.child_of_type(declaration.node, 'modifiers')
        if modifiers is None:
            return []
        return [declaration.text(child) for child in modifiers.children]
