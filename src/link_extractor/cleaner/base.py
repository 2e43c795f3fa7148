"""Base URL cleaner interface."""

from abc import ABC, abstractmethod

from ..models import Link


class UrlCleaner(ABC):
    """Abstract base class for URL cleaners."""

    name: str = "unknown"

    @abstractmethod
    def clean(self, link: Link) -> Link:
        """
        Rewrite the URL of a link.

        Must be deterministic and free of side effects. The source file and
        link text are carried over unchanged.

        Args:
            link: Link to clean

        Returns:
            A Link with the cleaned URL (the same Link if nothing changed)
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
