"""
Map source files to the languages the sequence generators understand
"""
import os


class LanguageDetector:
    """Pick a generator language from a file's extension"""

    EXTENSIONS = {
        '.py': 'python',
        '.pyi': 'python',
        '.java': 'java',
    }

    SUPPORTED_LANGUAGES = frozenset(EXTENSIONS.values())

    @staticmethod
    def detect(filepath):
        """'pkg/mod.py' -> 'python', 'Main.java' -> 'java', anything else -> None"""
        ext = os.path.splitext(filepath)[1].lower()
        return LanguageDetector.EXTENSIONS.get(ext)

    @staticmethod
    def is_source_file(filepath):
        return LanguageDetector.detect(filepath) is not None
