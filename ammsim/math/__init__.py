"""Fixed-point primitives for price computation.

- precise_div: unsigned 64.64 division valid for full 256-bit numerators
- to_float / wide_decimal_to_float: fixed-point to float conversion
"""

from ammsim.math.fixed_point import precise_div, to_float, wide_decimal_to_float

__all__ = ["precise_div", "to_float", "wide_decimal_to_float"]
