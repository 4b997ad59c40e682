"""
Abstract base class for fragment sources.
Every source turns raw document bytes into per-page PositionedFragments.
"""

from abc import ABC, abstractmethod

from app.schemas.contracts import PageFragments


class FragmentSource(ABC):
    """
    Abstract base class for anything that can read positioned text.

    Every source must:
    1. Accept the raw document bytes
    2. Return one PageFragments per page, page 1 first
    3. Report its name and version
    4. Raise EngineError on failure (never return partial pages)
    """

    @property
    @abstractmethod
    def engine_name(self) -> str:
        """Unique identifier, e.g. 'pdfplumber'."""
        ...

    @property
    @abstractmethod
    def engine_version(self) -> str:
        """Version of the underlying library."""
        ...

    @abstractmethod
    def load_pages(self, data: bytes) -> list[PageFragments]:
        """
        Read every page of the document.

        Must raise EngineError when the document cannot be opened or a page
        cannot be read.
        """
        ...


class EngineError(Exception):
    """Raised when a fragment source cannot read a document."""

    def __init__(self, engine_name: str, error_code: str, message: str):
        self.engine_name = engine_name
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{engine_name}] {error_code}: {message}")
