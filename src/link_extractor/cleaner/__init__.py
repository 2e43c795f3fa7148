"""Cleaner module for normalizing extracted URLs."""

from .base import UrlCleaner
from .tracker import TrackerParamCleaner
from .youtube import YouTubeUrlCleaner
from .factory import CompositeUrlCleaner, build_cleaner, register_cleaner, list_cleaners

__all__ = [
    "UrlCleaner",
    "TrackerParamCleaner",
    "YouTubeUrlCleaner",
    "CompositeUrlCleaner",
    "build_cleaner",
    "register_cleaner",
    "list_cleaners",
]
