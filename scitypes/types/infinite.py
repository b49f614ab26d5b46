"""This module contains the ordered, unbounded scientific types."""
from .base import Known


class Infinite(Known):
    """Abstract parent of unbounded numeric roles."""


class Continuous(Infinite):
    """Real-valued measurements, e.g. heights or prices."""


class Count(Infinite):
    """Non-negative whole-number tallies, e.g. the number of calls."""
