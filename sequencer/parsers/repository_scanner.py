"""
Multi-language repository scanner
"""
import fnmatch
import logging
import os
from collections import defaultdict

from tree_sitter import Language, Parser
import tree_sitter_python as tspython
import tree_sitter_java as tsjava

from sequencer.extractors.java_extractor import JavaExtractor
from sequencer.extractors.python_extractor import PythonExtractor
from sequencer.models.declaration import DeclarationKind
from sequencer.resolution.symbol_index import SymbolIndex
from sequencer.utils.language_detector import LanguageDetector

logger = logging.getLogger(__name__)


class RepositoryScanner:
    """Multi-language repository scanner supporting Python and Java"""

    DEFAULT_IGNORE = {
        '.git', '.svn', 'node_modules', '__pycache__', '.venv', 'venv',
        'env', 'build', 'dist', '.idea', '.vscode', 'target', 'out',
        '.pytest_cache', '.mypy_cache', 'htmlcov', '.tox', 'eggs',
        '*.egg-info', '.eggs', 'migrations', 'tests', 'test',
    }

    def __init__(self, ignore_patterns=None, index=None):
        self.parsers = {}
        self.extractors = {}
        self.index = index if index is not None else SymbolIndex()
        self.file_count = 0
        self.error_count = 0

        self.ignore_patterns = self.DEFAULT_IGNORE.copy()
        if ignore_patterns:
            self.ignore_patterns.update(ignore_patterns)

        self._setup_parsers()

    @property
    def declarations(self):
        return self.index.declarations

    def _setup_parsers(self):
        """Initialize parsers for all supported languages"""
        try:
            py_lang = Language(tspython.language())
            self.parsers['python'] = Parser(py_lang)
            self.extractors['python'] = PythonExtractor()
            logger.debug("Python parser loaded")
        except Exception as e:
            logger.error("Python parser failed: %s", e)

        try:
            java_lang = Language(tsjava.language())
            self.parsers['java'] = Parser(java_lang)
            self.extractors['java'] = JavaExtractor()
            logger.debug("Java parser loaded")
        except Exception as e:
            logger.error("Java parser failed: %s", e)

    def should_ignore(self, path):
        """Check if any segment of path matches an ignore pattern"""
        for segment in path.replace(os.sep, '/').split('/'):
            if segment in ('', '.'):
                continue
            if segment.startswith('.'):
                return True
            if any(fnmatch.fnmatch(segment, pattern) for pattern in self.ignore_patterns):
                return True
        return False

    def scan_repository(self, repo_path):
        """
        Scan entire repository

        Returns:
            SymbolIndex holding every declaration found
        """
        logger.info("Scanning repository: %s", repo_path)

        for root, dirs, files in os.walk(repo_path):
            # Only test the part below repo_path against the ignore patterns
            rel_root = os.path.relpath(root, repo_path)
            dirs[:] = sorted(d for d in dirs if not self.should_ignore(os.path.join(rel_root, d)))

            for filename in sorted(files):
                filepath = os.path.join(root, filename)
                rel_path = os.path.relpath(filepath, repo_path)

                if self.should_ignore(rel_path):
                    continue

                if not LanguageDetector.is_source_file(filepath):
                    continue
                language = LanguageDetector.detect(filepath)
                if language not in self.parsers:
                    logger.debug("No parser for %s, skipping %s", language, rel_path)
                    continue

                try:
                    logger.debug("[%-6s] Parsing: %s", language, rel_path)
                    self.scan_file(filepath, rel_path, language)
                    self.file_count += 1
                except Exception as e:
                    logger.warning("Failed to scan %s: %s", rel_path, e)
                    self.error_count += 1

        self._log_scan_summary()
        return self.index

    def scan_file(self, filepath, rel_path, language):
        """Scan a single file"""
        with open(filepath, 'rb') as f:
            source_code = f.read()
        return self.scan_source(source_code, rel_path, language)

    def scan_source(self, source_code, rel_path, language=None):
        """
        Parse source held in memory and add its declarations to the index

        Args:
            source_code: Source text (str or bytes)
            rel_path: Path used to name the file in declarations
            language: Language identifier, detected from rel_path when omitted

        Returns:
            List of SourceDeclaration objects found in the source
        """
        language = language or LanguageDetector.detect(rel_path)
        if language not in self.parsers:
            raise ValueError(f"Unsupported language for {rel_path}: {language}")
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')

        tree = self.parsers[language].parse(source_code)
        extractor = self.extractors[language]

        # Extract declarations
        declarations = extractor.extract(tree.root_node, source_code, rel_path)

        self.index.add_all(declarations)
        return declarations

    def _log_scan_summary(self):
        """Log scan summary"""
        stats = self.get_statistics()
        logger.info(
            "Parsed %d files (%d errors): %d classes, %d functions, %d methods, %d constructors",
            self.file_count,
            self.error_count,
            stats['total_classes'],
            stats['total_functions'],
            stats['total_methods'],
            stats['total_constructors'],
        )

    def get_statistics(self):
        """Get repository statistics"""
        declarations = self.index.declarations
        by_kind = defaultdict(int)
        by_language = defaultdict(lambda: defaultdict(int))
        for declaration in declarations:
            label = self._label(declaration)
            by_kind[label] += 1
            by_language[declaration.language][label] += 1

        return {
            'total_files': self.file_count,
            'total_errors': self.error_count,
            'total_classes': by_kind['classes'],
            'total_functions': by_kind['functions'],
            'total_methods': by_kind['methods'],
            'total_constructors': by_kind['constructors'],
            'by_language': {language: dict(counts) for language, counts in by_language.items()},
        }

    @staticmethod
    def _label(declaration):
        if declaration.kind is DeclarationKind.CLASS:
            return 'classes'
        if declaration.kind.is_constructor:
            return 'constructors'
        if declaration.owner:
            return 'methods'
        return 'functions'
