"""Rate strategy subpackage - each strategy in its own module."""

from dancerate.rate.strategies.simple import rate_simple
from dancerate.rate.strategies.trap_nation import rate_trap_nation

__all__ = [
    "rate_simple",
    "rate_trap_nation",
]
