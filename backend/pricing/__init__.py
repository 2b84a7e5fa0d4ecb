"""
Module 'pricing' (feature-first): formats de cadres, table statique, prix persistés et résolution.
"""

from .sizes import FrameSize, FrameType, parse_frame_size, parse_frame_type, frame_size_label, frame_type_label
from .service import resolve_price, resolve_price_with_source, lowest_price

__all__ = [
    # sizes
    "FrameSize",
    "FrameType",
    "parse_frame_size",
    "parse_frame_type",
    "frame_size_label",
    "frame_type_label",
    # service
    "resolve_price",
    "resolve_price_with_source",
    "lowest_price",
]
