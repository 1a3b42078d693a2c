# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Fuzz harness for SGX quote parsing.

"""Fuzz harness for parse_quote.

Any input must either decode or raise ParseError. Every other exception
(IndexError, struct.error, ...) propagates and is reported as a crash.

Run with:
    python fuzz/fuzz_sgx_quote.py -max_len=8192
"""
import sys

import atheris

with atheris.instrument_imports():
    from sgx_quote import ParseError, parse_quote


def TestOneInput(data: bytes) -> None:
    try:
        quote = parse_quote(data)
    except ParseError:
        return
    # A successful decode must describe the whole input
    assert len(quote.signed_message) == 432
    assert len(quote.isv_report.signed_message) == 384
    assert bytes(quote.signed_message) == data[:432]


def main() -> None:
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
