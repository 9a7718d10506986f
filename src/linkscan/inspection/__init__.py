"""Filesystem inspection: per-path link classification and directory walking."""

from .classifier import LinkClassifier
from .walker import normalize_path, normalize_roots, walk

__all__ = [
    "LinkClassifier",
    "normalize_path",
    "normalize_roots",
    "walk",
]
