"""This module contains the image scientific types, which are parametrized by
their pixel dimensions.
"""
from __future__ import annotations
from typing import Any

from .base import Known
from .finite import check_positive_int


class Image(Known):
    """Abstract parent of images ``W`` pixels wide and ``H`` pixels high."""

    params = ("W", "H")

    @classmethod
    def validate(cls, width: Any, height: Any) -> tuple[int, int]:
        return (check_positive_int("W", width), check_positive_int("H", height))


class GrayImage(Image):
    """Single-channel (grayscale) images."""


class ColorImage(Image):
    """Multi-channel (color) images."""
