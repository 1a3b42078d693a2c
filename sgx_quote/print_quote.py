# Copyright 2025 Hewlett Packard Enterprise Development LP.
# SPDX-License-Identifier: MIT
#
# Print quote utility - Display SGX quote contents in human-readable format.

import argparse
import sys
from typing import List, Optional

from . import sgx_logging
from .errors import ParseError
from .quote import parse_quote


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse command-line arguments, read an SGX quote file, and print its details.

    Main entry point for the sgx-print command-line utility. Parses an SGX
    DCAP quote file and displays its contents in human-readable format.

    Returns:
        int: Exit code (0 for success, 1 for error)

    Command-line arguments:
        -f, --file: Path to the quote file (default: quote.dat)
        -d, --debug: Enable debug mode for detailed parsing information
        -q, --quiet: Only log warnings and errors
        --log-file: Also write logs to this file
        --signed-message: Print the hex of the signed header || ISV report

    Examples:
        sgx-print -f quote.dat
        sgx-print -f quote.dat --debug
    """
    parser = argparse.ArgumentParser(description="Print SGX quote details")
    parser.add_argument(
        "-f",
        "--file",
        default="quote.dat",
        help="Path to the SGX quote file (default: quote.dat)",
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False, help="Enable debug mode"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=False, help="Only log warnings and errors"
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument(
        "--signed-message",
        action="store_true",
        default=False,
        help="Print the signed message (header || ISV report) as hex",
    )
    args = parser.parse_args(argv)

    logger = sgx_logging.setup_cli_logging(
        verbose=args.debug, quiet=args.quiet, log_file=args.log_file
    )

    try:
        with open(args.file, "rb") as file:
            quote_data = file.read()
    except FileNotFoundError:
        logger.error(f"File '{args.file}' not found")
        return 1
    except OSError as e:
        logger.error(f"Error reading '{args.file}': {e}")
        return 1

    logger.info(f"Reading SGX quote from: {args.file}")
    logger.info(f"File size: {len(quote_data)} bytes\n")

    try:
        quote = parse_quote(quote_data, debug=args.debug)
    except ParseError as e:
        logger.error(f"Error parsing SGX quote: {e}")
        return 1

    quote.print_details()
    if args.signed_message:
        logger.info(f"\nSigned Message:              {quote.signed_message.hex()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
