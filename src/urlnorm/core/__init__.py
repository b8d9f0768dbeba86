"""Pure normalization pipeline: input model, component rules and orchestration."""
from __future__ import annotations

from .models import ParsedUrl
from .normalizers import normalize_fragment, normalize_host, normalize_path, normalize_query
from .pipeline import UrlNormalizer, normalize, token_stream

__all__ = [
    "ParsedUrl",
    "UrlNormalizer",
    "normalize",
    "normalize_fragment",
    "normalize_host",
    "normalize_path",
    "normalize_query",
    "token_stream",
]
