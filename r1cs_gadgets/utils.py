"""
Small integer helpers.
"""


def count_bits(number: int) -> int:
    """Number of bits needed to represent a non-negative integer (0 -> 0)."""
    if number < 0:
        raise ValueError(f"count_bits expects a non-negative integer, got {number}")
    return number.bit_length()
