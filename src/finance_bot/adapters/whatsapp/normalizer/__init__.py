from __future__ import annotations

from .normalizer import extract_inbound_messages, normalize_messages

__all__ = [
    "extract_inbound_messages",
    "normalize_messages",
]
