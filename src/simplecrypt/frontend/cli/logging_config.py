"""Lightweight logging setup for the command line."""

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    # Configure root logger once; diagnostics go to stderr so stdout only carries results.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
