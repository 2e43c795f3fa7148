"""Cleaner registry and the composite cleaner chain."""

from typing import Iterable, Iterator, Optional

from .base import UrlCleaner
from .tracker import TrackerParamCleaner
from .youtube import YouTubeUrlCleaner
from ..errors import ErrorKind, LinkExtractionError
from ..models import Link


# Registry of available cleaners, in default order
_CLEANERS: list[type[UrlCleaner]] = [
    TrackerParamCleaner,
    YouTubeUrlCleaner,
]


class CompositeUrlCleaner(UrlCleaner):
    """Applies a sequence of cleaners in order, each feeding the next."""

    name = "composite"

    def __init__(self, cleaners: Iterable[UrlCleaner] = ()):
        self._cleaners: list[UrlCleaner] = list(cleaners)

    def add(self, cleaner: UrlCleaner) -> "CompositeUrlCleaner":
        """Append a cleaner to the end of the chain."""
        self._cleaners.append(cleaner)
        return self

    def remove(self, name: str) -> "CompositeUrlCleaner":
        """Drop every cleaner with the given name."""
        self._cleaners = [c for c in self._cleaners if c.name != name]
        return self

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._cleaners]

    def __len__(self) -> int:
        return len(self._cleaners)

    def __iter__(self) -> Iterator[UrlCleaner]:
        return iter(self._cleaners)

    def clean(self, link: Link) -> Link:
        for cleaner in self._cleaners:
            link = cleaner.clean(link)
        return link


def register_cleaner(cleaner_class: type[UrlCleaner]) -> None:
    """
    Register a new cleaner class.

    Args:
        cleaner_class: Cleaner class to register; must be constructible
            without arguments
    """
    if cleaner_class not in _CLEANERS:
        _CLEANERS.append(cleaner_class)


def list_cleaners() -> list[str]:
    """List the names of all registered cleaners."""
    return [cleaner_class.name for cleaner_class in _CLEANERS]


def build_cleaner(
    names: Optional[Iterable[str]] = None,
    extra_tracker_params: Iterable[str] = (),
) -> CompositeUrlCleaner:
    """
    Build a cleaner chain from registered cleaner names.

    Args:
        names: Cleaners to apply, in order (default: all registered)
        extra_tracker_params: Additional query keys for the tracker cleaner

    Returns:
        CompositeUrlCleaner applying the cleaners in the given order
    """
    by_name = {cleaner_class.name: cleaner_class for cleaner_class in _CLEANERS}
    if names is None:
        names = list(by_name)

    composite = CompositeUrlCleaner()
    for name in names:
        cleaner_class = by_name.get(name)
        if cleaner_class is None:
            raise LinkExtractionError(
                ErrorKind.INVALID_CONFIGURATION,
                f"Unknown cleaner {name!r} (available: {', '.join(by_name)})",
            )
        if cleaner_class is TrackerParamCleaner:
            composite.add(TrackerParamCleaner(extra_params=extra_tracker_params))
        else:
            composite.add(cleaner_class())
    return composite
