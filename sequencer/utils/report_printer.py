"""
Report printing utilities for call stacks and scans
"""
import json


class ReportPrinter:
    """Print call stacks and scan summaries"""

    @staticmethod
    def print_summary(stats):
        """Print a summary of the scan"""
        print("\n" + "="*70)
        print("REPOSITORY SUMMARY")
        print("="*70)
        print(f"Total Files: {stats['total_files']}")
        print(f"Total Errors: {stats['total_errors']}")
        print(f"Total Classes: {stats['total_classes']}")
        print(f"Total Functions: {stats['total_functions']}")
        print(f"Total Methods: {stats['total_methods']}")
        print(f"Total Constructors: {stats['total_constructors']}")

        print("\nBy Language:")
        for lang, counts in sorted(stats['by_language'].items()):
            print(f"\n  {lang.upper()}:")
            for label in ('classes', 'functions', 'methods', 'constructors'):
                print(f"    {label.capitalize()}: {counts.get(label, 0)}")

    @staticmethod
    def print_call_stack(call_stack, as_json=False):
        """Print a call stack as indented text or as JSON"""
        if as_json:
            print(json.dumps(call_stack.to_dict(), indent=2))
            return

        print(f"\n{'='*70}")
        print(f"CALL SEQUENCE: {call_stack.method.full_name}")
        print(f"{'='*70}")
        print(call_stack.generate_text())

    @staticmethod
    def print_declarations(name, declarations):
        """Print the declarations matching a name"""
        if not declarations:
            print(f"\nNo declaration named '{name}' found.")
            return

        print(f"\nDeclarations named '{name}':")
        for declaration in declarations:
            print(f"  • {declaration.qualified_name} [{declaration.language}] "
                  f"{declaration.filepath}:{declaration.start_line}")
