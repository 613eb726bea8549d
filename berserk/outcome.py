# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Result values returned by :py:func:`berserk.pkcs1.forge`."""


class Outcome(object):
    """Base class of the forging results."""

    ok = False
    retryable = False

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self == other

    __hash__ = None


class Success(Outcome):
    """
    Signature was forged.

    :ivar bytes signature: the forged signature, modulus sized, big endian
    """

    ok = True

    def __init__(self, signature):
        self.signature = bytes(signature)

    def __repr__(self):
        return "Success(signature={0})".format(self.signature.hex())


class Retryable(Outcome):
    """
    Forgery is not possible for this digest, a different one may work.

    :ivar str reason: human readable description of the failed constraint
    """

    retryable = True

    def __init__(self, reason):
        self.reason = reason

    def __repr__(self):
        return "Retryable(reason={0!r})".format(self.reason)


class Fatal(Outcome):
    """
    Forgery is not possible for the given parameters.

    :ivar str reason: human readable description of the problem
    :ivar error: the exception class describing the problem
    """

    def __init__(self, reason, error):
        self.reason = reason
        self.error = error

    def __repr__(self):
        return "Fatal(reason={0!r}, error={1})".format(
            self.reason, self.error.__name__)
