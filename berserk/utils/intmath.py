# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Exact integer arithmetic on arbitrary size numbers."""


def icbrt(number):
    """
    Return the integer cube root of ``number`` rounded down.

    Newton iteration started above the root, the iterates decrease
    monotonically and stop at ``floor(number ** (1/3))``.

    :param int number: non-negative integer
    :rtype: int
    """
    if number < 0:
        raise ValueError("Cube root of negative number requested")
    if number == 0:
        return 0
    root = 1 << ((number.bit_length() + 2) // 3)
    while True:
        new_root = (2 * root + number // (root * root)) // 3
        if new_root >= root:
            return root
        root = new_root


def icbrt_ceil(number):
    """Return the integer cube root of ``number`` rounded up."""
    root = icbrt(number)
    if root ** 3 == number:
        return root
    return root + 1


def trailing_zeros(number):
    """
    Return the 2-adic valuation of ``number``.

    :raises ValueError: for zero, which has no finite valuation
    """
    if number == 0:
        raise ValueError("Zero has no lowest set bit")
    return (number & -number).bit_length() - 1


def round_div(numerator, denominator):
    """Divide and round to the nearest integer, halves rounded up."""
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return (2 * numerator + denominator) // (2 * denominator)


def align_down(bits, alignment=8):
    """Round ``bits`` down to a multiple of ``alignment``."""
    return bits - bits % alignment


def align_up(bits, alignment=8):
    """Round ``bits`` up to a multiple of ``alignment``."""
    return -(-bits // alignment) * alignment
