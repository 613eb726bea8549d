# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

"""
Forging of RSA PKCS#1 v1.5 signatures accepted by lenient BER parsers.

For exponent 3 keys, verifiers that decode overlong BER length fields
without complaint (the "BERserk" class of bugs) accept signatures whose
cube merely has the right bytes in a few places. No private key is needed.

Use :py:func:`berserk.pkcs1.forge` to get a signature as a
:py:mod:`berserk.outcome` value, or :py:func:`berserk.pkcs1.sign_pkcs1v15`
to get it directly, with failures raised as :py:mod:`berserk.errors`
exceptions. The byte layouts used are in :py:mod:`berserk.templates`,
the arithmetic in :py:mod:`berserk.roots` and :py:mod:`berserk.middle`.
"""
