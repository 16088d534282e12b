"""
Pure domain layer.

Helpers shared by engines and services, with NO dependencies on:
- Configuration files
- System time (except SystemClock)
- I/O
"""

from juris_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from juris_kernel.domain.parsing import (
    parse_amount,
    parse_count,
    parse_date,
    parse_decimal,
    parse_optional_amount,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "parse_amount",
    "parse_count",
    "parse_date",
    "parse_decimal",
    "parse_optional_amount",
]
