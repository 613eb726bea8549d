# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Exceptions raised while forging signatures."""


class BerserkError(Exception):
    """Base class for all errors raised by the package."""

    pass


class FatalError(BerserkError):
    """Error that will happen again if the call is repeated unchanged."""

    pass


class UnsupportedParameters(FatalError):
    """No template exists for the requested hash and modulus size."""

    pass


class WrongHashLength(FatalError):
    """Digest length doesn't match the hash of the template."""

    pass


class InternalInvariantViolation(FatalError):
    """Partial results overlap or are otherwise malformed, a defect."""

    pass


class RetryableInfeasible(BerserkError):
    """
    No forgery exists for this specific digest.

    The caller may change the message (and thus the digest) and try again.
    """

    pass
