#!/usr/bin/env python

# Author: berserk developers, (c) 2025
# Released under Gnu GPL v2.0, see LICENSE file for details

from setuptools import setup

setup(name="berserk",
      version="0.1.0",
      description="Forgery of PKCS#1 v1.5 RSA signatures for exponent 3 "
                  "keys checked by lenient BER parsers.",
      license="GPLv2",
      python_requires=">=3.6",
      install_requires=["ecdsa >= 0.18", "tlslite-ng >= 0.8.2"],
      packages=["berserk", "berserk.utils"])
