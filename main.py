"""
Main entry point for the sequence generator
Builds the call sequence of a function, constructor or class

Usage:
    python main.py /path/to/repo OrderService.checkout
    python main.py /path/to/repo checkout --max-depth 5 --json
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

from sequencer.errors import SequencerError
from sequencer.generators.coordinator import SequenceCoordinator
from sequencer.models.sequence_params import SequenceParams
from sequencer.parsers.repository_scanner import RepositoryScanner
from sequencer.utils.language_detector import LanguageDetector
from sequencer.utils.node_search import NodeSearch
from sequencer.utils.report_printer import ReportPrinter

# Load SEQUENCER_* settings from a .env file
load_dotenv()


def build_parser():
    parser = argparse.ArgumentParser(description='Build the call sequence of a declaration')
    parser.add_argument('repo_path', help='Path to local repository')
    parser.add_argument('entry', help='Starting declaration: name, Owner.name or qualified name')
    parser.add_argument('--language', choices=sorted(LanguageDetector.SUPPORTED_LANGUAGES),
                        help='Restrict the entry lookup to one language')
    parser.add_argument('--max-depth', type=int, help='Inlining depth (default: SEQUENCER_MAX_DEPTH or 3)')
    parser.add_argument('--allow-recursion', action='store_true', default=None,
                        help='Expand recursive calls until the depth limit')
    parser.add_argument('--json', action='store_true', help='Print the call stack as JSON')
    parser.add_argument('--summary', action='store_true', help='Print scan statistics first')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None):
    """Main function to run the sequence generator"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        params = SequenceParams.from_env()
        if args.max_depth is not None:
            params = SequenceParams(max_depth=args.max_depth, allow_recursion=params.allow_recursion)
    except ValueError as e:
        parser.error(str(e))
    if args.allow_recursion:
        params.allow_recursion = True

    # Scan repository
    scanner = RepositoryScanner()
    index = scanner.scan_repository(args.repo_path)

    if args.summary:
        ReportPrinter.print_summary(scanner.get_statistics())

    matches = NodeSearch.find_declarations(index, args.entry, language=args.language)
    if len(matches) != 1:
        ReportPrinter.print_declarations(args.entry, matches)
        if matches:
            print("\nPlease use a more specific name.")
        return 1

    coordinator = SequenceCoordinator(params, index)
    try:
        call_stack = coordinator.generate(matches[0])
    except SequencerError as e:
        print(f"\n❌ Error during generation: {e}")
        return 1

    ReportPrinter.print_call_stack(call_stack, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
