from abc import ABC, abstractmethod

from gxdocgen.models import DocComment


class BaseParser(ABC):
    """Abstract base class for documentation comment parsers."""

    @abstractmethod
    def parse(self, source_code: str) -> DocComment | None:
        """Parse structured documentation from object source code.

        Args:
            source_code: The object's source text

        Returns:
            DocComment, or None if the source carries no documentation
        """
        pass
