"""
Resolution oracle interface consumed by the generators
"""
from abc import ABC, abstractmethod


class ResolutionOracle(ABC):
    """
    Maps a call site to the declaration it invokes
    """

    @abstractmethod
    def resolve(self, call_site):
        """
        Resolve a call site

        Args:
            call_site: CallSite (call node + enclosing declaration)

        Returns:
            SourceDeclaration the call targets, or None when the target is
            outside the analysed code or cannot be determined statically
        """
        pass
