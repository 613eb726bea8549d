# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Closest vector search in two dimensional integer lattices."""

from itertools import product

from .intmath import round_div


def _dot(first, second):
    return first[0] * second[0] + first[1] * second[1]


def _sub(first, second, times=1):
    return (first[0] - times * second[0], first[1] - times * second[1])


def reduce_basis(first, second):
    """
    Lagrange-Gauss reduction of a two dimensional lattice basis.

    :param tuple first: first basis vector, pair of ints
    :param tuple second: second basis vector, linearly independent of
        ``first``
    :return: reduced basis, shortest vector first
    :rtype: tuple
    """
    if _dot(first, first) > _dot(second, second):
        first, second = second, first
    while True:
        quotient = round_div(_dot(first, second), _dot(first, first))
        second = _sub(second, first, quotient)
        if _dot(second, second) >= _dot(first, first):
            return first, second
        first, second = second, first


def closest_vectors(basis, target, radius=1):
    """
    Generate lattice vectors close to ``target``.

    The target is expressed in the reduced ``basis`` by Babai rounding, then
    all lattice points whose coordinates differ from the rounded ones by at
    most ``radius`` are yielded, the rounded point itself first.

    :param tuple basis: reduced basis as returned by :py:func:`reduce_basis`
    :param tuple target: pair of ints
    :param int radius: size of the neighbourhood searched
    """
    first, second = basis
    det = first[0] * second[1] - first[1] * second[0]
    if det == 0:
        raise ValueError("Basis vectors are linearly dependent")
    coef_first = round_div(target[0] * second[1] - target[1] * second[0], det)
    coef_second = round_div(first[0] * target[1] - first[1] * target[0], det)

    offsets = sorted(product(range(-radius, radius + 1), repeat=2),
                     key=lambda x: (abs(x[0]) + abs(x[1]), x))
    for d_first, d_second in offsets:
        c_first = coef_first + d_first
        c_second = coef_second + d_second
        yield (c_first * first[0] + c_second * second[0],
               c_first * first[1] + c_second * second[1])
