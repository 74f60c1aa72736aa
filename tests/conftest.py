"""
Shared fixtures backed by real tree-sitter parsers
"""
import pytest

from sequencer.parsers.repository_scanner import RepositoryScanner
from tests.helpers import by_name


@pytest.fixture
def scanner():
    return RepositoryScanner()


@pytest.fixture
def parse_python(scanner):
    def parse(source, path='module.py'):
        return by_name(scanner.scan_source(source, path, 'python'))
    return parse


@pytest.fixture
def parse_java(scanner):
    def parse(source, path='Main.java'):
        return scanner.scan_source(source, path, 'java')
    return parse
