# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""
Correction fixing bytes in the middle of the cube.

With a 2048 bit modulus the fixed bytes in the middle of the cube are too
far from both ends to be reached by either root solver. The signature
``s = hi + mid + lo`` then gets a correction ``mid = M << start`` placed
between ``lo`` and ``hi``. Modulo ``2**high_bit`` (``high_bit`` being the
top of the middle window) its cube is::

    (hi + lo)**3 + 3*(hi + lo)**2 * mid + 3*hi*mid**2 + 3*lo*mid**2 + mid**3

``start`` is chosen so that ``3*hi*mid**2`` vanishes modulo ``2**high_bit``
and ``M`` is kept small enough that the last two terms stay well below the
window. The window is then decided by the part linear in ``M``, and finding
an ``M`` that puts it in the right place is a closest vector problem in a
two dimensional lattice.
"""

import logging

from tlslite.utils.cryptomath import bytesToNumber, numberToByteArray

from .errors import RetryableInfeasible
from .utils.intmath import trailing_zeros, align_up, align_down
from .utils.lattice import reduce_basis, closest_vectors

# bits of the correction needed above the size of the window
MIDDLE_SLACK_BITS = 16
# neighbourhood of the Babai point searched for a working correction
MIDDLE_SEARCH_RADIUS = 1


def correction_window(hi, lo, low_bit, high_bit):
    """
    Return the bits of the signature the correction can occupy.

    :param int hi: high part of the signature
    :param int lo: low part of the signature
    :param int low_bit: first bit of the cube fixed by the middle
    :param int high_bit: first bit above the middle
    :return: ``(start, end)`` bit positions, byte aligned
    """
    hi_zeros = trailing_zeros(hi)
    lo_bits = lo.bit_length()
    start = align_up(max(lo_bits, -(-(high_bit - hi_zeros) // 2)))
    # 3*lo*mid**2 and mid**3 each below 2**(low_bit-3)
    end = align_down(min(hi_zeros,
                         (low_bit - 3) // 3,
                         (low_bit - 5 - lo_bits) // 2))
    return start, end


def reconcile_middle(sig_hi, sig_lo, middle, offset):
    """
    Compute the correction that makes the cube match ``middle``.

    :param bytes sig_hi: output of :py:func:`~berserk.roots.cube_root_prefix`
    :param bytes sig_lo: output of :py:func:`~berserk.roots.cube_root_suffix`
    :param bytes middle: bytes required in the cube
    :param int offset: position of the least significant byte of ``middle``
        counted from the least significant byte of the cube
    :return: correction encoded on ``len(sig_hi)`` bytes, big endian; it
        has no bits in common with either ``sig_hi`` or ``sig_lo``
    :rtype: bytearray
    :raises RetryableInfeasible: if no correction fitting between the two
        parts was found
    """
    size = len(sig_hi)
    if not middle or offset + len(middle) > size:
        raise ValueError("Middle doesn't fit in the signature")
    hi = bytesToNumber(bytearray(sig_hi))
    lo = bytesToNumber(bytearray(sig_lo))
    if not hi or not lo & 1:
        raise ValueError("High part must be non zero and low part odd")

    low_bit = offset * 8
    high_bit = low_bit + len(middle) * 8
    start, end = correction_window(hi, lo, low_bit, high_bit)
    width = end - start
    if width < len(middle) * 8 + MIDDLE_SLACK_BITS:
        raise RetryableInfeasible(
            "No room for the middle correction: bits {0} to {1}"
            .format(start, end))
    logging.debug("Middle correction placed in bits %d to %d", start, end)

    modulus = 1 << high_bit
    base = hi + lo
    const = pow(base, 3, modulus)
    slope = (3 * base * base << start) % modulus
    want = bytesToNumber(bytearray(middle))

    # lattice of (M * scale, M * slope mod modulus): the scale makes the
    # allowed range of M as wide as the allowed error of the linear part,
    # which is the lower half of the window value
    scale = 1 << (low_bit - width - 1)
    basis = reduce_basis((scale, slope), (0, modulus))
    target = (scale << (width - 1),
              (want << low_bit) + (1 << (low_bit - 2)) - const)

    for vector in closest_vectors(basis, target, MIDDLE_SEARCH_RADIUS):
        correction = vector[0] // scale
        if not 0 <= correction < 1 << width:
            continue
        mid = correction << start
        if pow(hi | mid | lo, 3, modulus) >> low_bit == want:
            return numberToByteArray(mid, size)

    raise RetryableInfeasible("No middle correction found around the "
                              "closest lattice point")
