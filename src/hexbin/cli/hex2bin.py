"""
hex2bin - Intel HEX to Binary Command-Line Interface
====================================================

This module implements the command-line interface for the converter.
It reads Intel HEX text and either writes the assembled binary image or
explains each record.

Modes
-----
- **dump** (default): Assemble the image and write raw binary
- **explain**: Print one human-readable line per record, no assembly

Usage Examples
--------------
Convert from stdin to stdout:
    $ hex2bin < firmware.hex > firmware.bin

Convert between files:
    $ hex2bin -i firmware.hex -o firmware.bin

Explain every record:
    $ hex2bin explain < firmware.hex
    0001: DATA: 3 bytes from 0x0030: 02 33 7A
    0002: EOF: 0 bytes from 0x0000:
"""

import codecs
import io
import logging
from typing import BinaryIO, Iterator, Optional

import click

from hexbin import __version__
from hexbin.cli.errors import handle_cli_exception
from hexbin.config import HexBinConfig
from hexbin.ihex import HexImage

# Logger for this module
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging to stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def decode_lines(stream: BinaryIO, encoding: str) -> Iterator[str]:
    """
    Lazily decode a binary stream into lines split on "\\n" only.

    Decoding happens before splitting so multi-byte encodings such as
    UTF-16 keep their line breaks intact.
    """
    text = io.TextIOWrapper(stream, encoding=encoding, newline="\n")
    try:
        yield from text
    finally:
        # Leave the underlying stream for click to close
        text.detach()


def format_register(value: Optional[int]) -> str:
    return "none" if value is None else f"0x{value:02X}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "mode",
    type=click.Choice(["dump", "explain"], case_sensitive=False),
    default="dump",
    required=False,
)
@click.option(
    "-i", "--input",
    "input_file",
    type=click.File("rb"),
    default="-",
    help="Intel HEX input file (default: stdin)",
)
@click.option(
    "-o", "--output",
    "output_file",
    type=click.File("wb", lazy=True),
    default="-",
    help="Output file (default: stdout)",
)
@click.option(
    "-e", "--encoding",
    default=None,
    help="Input text encoding (default: ascii, or $HEXBIN_ENCODING)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output on stderr",
)
@click.version_option(version=__version__, prog_name="hex2bin")
def main(
    mode: str,
    input_file: BinaryIO,
    output_file: BinaryIO,
    encoding: Optional[str],
    verbose: bool,
) -> None:
    """
    Convert Intel HEX to a raw binary image.

    MODE is "dump" (default) to write the binary image, or "explain" to
    print a description of each record instead.

    \b
    Examples:
      hex2bin < firmware.hex > firmware.bin
      hex2bin -i firmware.hex -o firmware.bin
      hex2bin explain < firmware.hex

    The output file is only written once the whole input has been
    converted successfully.
    """
    config = HexBinConfig.from_env()
    if encoding:
        config.encoding = encoding
    if verbose:
        config.verbose = True

    setup_logging(config.verbose)
    logger.debug(f"Mode: {mode}, encoding: {config.encoding}")

    try:
        hex_image = HexImage(decode_lines(input_file, config.encoding))

        if mode.lower() == "explain":
            # One encoder for the whole output, so a BOM is written once at most
            encoder = codecs.getincrementalencoder(config.encoding)()
            for description in hex_image.explain():
                output_file.write(encoder.encode(description + "\n"))
            output_file.write(encoder.encode("", final=True))
            return

        written = hex_image.dump(output_file)

        if config.verbose:
            click.echo(f"Wrote {written} bytes", err=True)
            state = hex_image.state
            if state is not None and (
                state.start_cs is not None or state.start_ip is not None
            ):
                click.echo(
                    f"Start address: CS={format_register(state.start_cs)} "
                    f"IP={format_register(state.start_ip)}",
                    err=True,
                )

    except Exception as e:
        handle_cli_exception(e, verbose=config.verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
