# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""
Cube roots matching fixed bytes at either end of the cube.

:py:func:`cube_root_prefix` works in the real domain: it finds a number
whose cube starts with given bytes. :py:func:`cube_root_suffix` works
modulo a power of two: it finds a number whose cube ends with given bytes.
The two results occupy disjoint bits and can be combined with a bitwise or.
"""

import logging

from tlslite.utils.cryptomath import bytesToNumber, numberToByteArray

from .errors import RetryableInfeasible, InternalInvariantViolation
from .utils.intmath import icbrt_ceil, align_down

# extra bits of the root kept above what the prefix length requires
GUARD_BITS = 8
# how many times the kept part of the root can be bumped up by one
PREFIX_ROUNDING_ATTEMPTS = 8


def _cube_prefix(value, bit_len, prefix_len):
    """Return the top ``prefix_len`` bytes of ``value**3`` or None."""
    cube = value ** 3
    if cube.bit_length() > bit_len:
        return None
    return numberToByteArray(cube, bit_len // 8)[:prefix_len]


def cube_root_prefix(prefix, bit_len):
    """
    Find a number whose cube begins with ``prefix``.

    The cube is considered as a ``bit_len`` bit big endian number. Only the
    most significant bits of the returned root are set; all bytes below the
    precision needed to fix the prefix are zero, so they can be filled by
    the other solvers.

    :param bytes prefix: required most significant bytes of the cube
    :param int bit_len: size of the cube in bits, multiple of 8
    :return: root encoded on ``bit_len // 8`` bytes, big endian
    :rtype: bytearray
    :raises RetryableInfeasible: if no root with the prefix was found
    """
    free_bits = bit_len - len(prefix) * 8
    if free_bits < 0:
        raise ValueError("Prefix longer than the modulus")
    target = bytesToNumber(bytearray(prefix)) << free_bits
    if not target:
        raise ValueError("Prefix must not be all zero")

    root = icbrt_ceil(target)
    # the cube is fixed over this many of its most significant bits,
    # the root needs about as many of its own, plus a safety margin
    fixed_bits = target.bit_length() - free_bits
    unit_bits = align_down(
        max(root.bit_length() - fixed_bits - GUARD_BITS, 0))
    logging.debug("Prefix root: %d bits, %d low bits cleared",
                  root.bit_length(), unit_bits)

    # rounding the kept part up keeps the cube above the target
    kept = -(-root >> unit_bits)
    for _ in range(PREFIX_ROUNDING_ATTEMPTS):
        candidate = kept << unit_bits
        if _cube_prefix(candidate, bit_len, len(prefix)) == prefix:
            return numberToByteArray(candidate, bit_len // 8)
        kept += 1

    raise RetryableInfeasible(
        "No cube root matching the prefix found in {0} attempts"
        .format(PREFIX_ROUNDING_ATTEMPTS))


def cube_root_suffix(suffix):
    """
    Find an odd number whose cube ends with ``suffix``.

    Cubing is a bijection on odd residues modulo any power of two, as its
    derivative ``3*x**2`` is odd for odd ``x``. The root is thus lifted one
    bit at a time (Hensel lifting): if the root is correct modulo ``2**i``,
    setting bit ``i`` of it flips only bit ``i`` of its cube modulo
    ``2**(i+1)``, so bit ``i`` of the root follows from bit ``i`` of the
    difference between the cube and the target.

    :param bytes suffix: required least significant bytes of the cube
    :return: root encoded on ``len(suffix)`` bytes, big endian
    :rtype: bytearray
    :raises RetryableInfeasible: when ``suffix`` is even; no cube root exists
        then
    """
    if not suffix:
        raise ValueError("Empty suffix")
    target = bytesToNumber(bytearray(suffix))
    if not target & 1:
        raise RetryableInfeasible("Suffix is even, it has no cube root "
                                  "modulo a power of two")

    width = len(suffix) * 8
    root = 1
    for bit in range(1, width):
        modulus = 1 << (bit + 1)
        if (pow(root, 3, modulus) - target) & (1 << bit):
            root |= 1 << bit

    if pow(root, 3, 1 << width) != target:
        raise InternalInvariantViolation(
            "Hensel lifting produced a wrong root")
    logging.debug("Suffix root lifted over %d bits", width)
    return numberToByteArray(root, len(suffix))
