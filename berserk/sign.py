# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""Command line tool for forging signatures."""

import sys
import getopt
import binascii

from .pkcs1 import forge, forge_message


def help_msg():
    """Print help message."""
    print("""Usage: python -m berserk.sign [-b bits] [--hash name]
       (--digest hex | -m message | --message-file file) [-o file]
-b bits             Size of the public key modulus, 1024 or 2048.
                    2048 by default
--hash name         Hash used for the signature, sha1 by default
--digest hex        Hex encoded digest to forge a signature for
-m message          Message to hash and forge a signature for
--message-file file File with the message to hash and forge a signature for
--attempts num      When a signature can't be forged for the message,
                    try again with a space appended to it, at most num
                    times in total. 16 by default
-o file             Write the raw signature to file instead of printing
                    it hex encoded
--help              This help message

Exit status is 0 when the signature was forged, 1 when it can't be forged
for the given digest (change the message and retry) and 2 when it can't be
forged for the given hash and key size.
""")


def main():
    """Forge a signature as specified on the command line."""
    bit_len = 2048
    hash_alg = "sha1"
    digest = None
    message = None
    attempts = 16
    output = None

    argv = sys.argv[1:]
    opts, args = getopt.getopt(argv, "b:m:o:",
                               ["help",
                                "hash=",
                                "digest=",
                                "message-file=",
                                "attempts="])
    for opt, arg in opts:
        if opt == "-b":
            bit_len = int(arg)
        elif opt == "--hash":
            hash_alg = arg
        elif opt == "--digest":
            digest = bytearray(binascii.unhexlify(arg))
        elif opt == "-m":
            message = arg.encode("utf-8")
        elif opt == "--message-file":
            with open(arg, "rb") as msg_file:
                message = msg_file.read()
        elif opt == "--attempts":
            attempts = int(arg)
        elif opt == "-o":
            output = arg
        else:
            assert opt == "--help"
            help_msg()
            sys.exit(0)

    if args:
        raise ValueError("Unexpected arguments: {0}".format(args))
    if (digest is None) == (message is None):
        raise ValueError("Exactly one of --digest, -m or --message-file "
                         "is required")

    if digest is not None:
        outcome = forge(hash_alg, bit_len, digest)
    else:
        outcome, signed = forge_message(bit_len, message, hash_alg,
                                        attempts)

    if not outcome.ok:
        print("Can't forge signature: {0}".format(outcome.reason),
              file=sys.stderr)
        sys.exit(1 if outcome.retryable else 2)

    if message is not None and signed != message:
        print("Signature made for the message with {0} space(s) appended"
              .format(len(signed) - len(message)), file=sys.stderr)

    if output:
        with open(output, "wb") as sig_file:
            sig_file.write(outcome.signature)
    else:
        print(binascii.hexlify(outcome.signature).decode("ascii"))


if __name__ == "__main__":
    main()
