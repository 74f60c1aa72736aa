"""
Test helpers: a dictionary-backed oracle and tree accessors
"""
from sequencer.resolution.oracle import ResolutionOracle


def callee_name(call_site):
    """Last name segment of the callee, e.g. 'join' for os.path.join(...)"""
    node = call_site.node
    if node.type == 'call':
        text = call_site.text(node.child_by_field_name('function'))
    elif node.type == 'method_invocation':
        text = call_site.text(node.child_by_field_name('name'))
    elif node.type == 'object_creation_expression':
        text = call_site.text(node.child_by_field_name('type'))
    else:
        return None
    return text.rsplit('.', 1)[-1]


class FakeOracle(ResolutionOracle):
    """Resolve calls by callee name through a plain dict"""

    def __init__(self, targets=None):
        self.targets = dict(targets or {})
        self.seen = []

    def resolve(self, call_site):
        name = callee_name(call_site)
        self.seen.append(name)
        return self.targets.get(name)


def by_name(declarations):
    return {declaration.name: declaration for declaration in declarations}


def call_names(frame):
    return [call.method.method_name for call in frame.calls]
