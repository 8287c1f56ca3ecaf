"""
pngchunk - Chunk Codec Command-Line Interface
=============================================

This module implements the command-line interface for the chunk codec.
It builds, decodes and inspects single PNG-style chunk records.

Commands
--------
- **encode**: Build a chunk record from a type tag and a message
- **decode**: Decode a chunk record and print its contents
- **type**: Show the property bits of a chunk type

Usage Examples
--------------
Encode a message as hex:
    $ pngchunk encode RuSt "This is where your secret message will be!"

Write the raw record bytes instead:
    $ pngchunk encode -f raw RuSt "hello" > chunk.bin

Decode a hex record:
    $ pngchunk decode 0000000552755374...

Decode raw bytes from stdin:
    $ pngchunk decode --raw < chunk.bin

Inspect a type tag:
    $ pngchunk type RuSt
"""

import logging
from typing import Optional

import click

from pngme import __version__
from pngme.chunk import Chunk, ChunkType
from pngme.config import CliConfig
from pngme.errors import PayloadDecodeError
from pngme.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the configuration loaded from the environment and verbosity.
    """

    def __init__(self) -> None:
        self.config: CliConfig = CliConfig.from_env()
        self.verbose: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


def parse_hex(text: str) -> bytes:
    """
    Convert hex text to bytes.

    Whitespace is ignored and an optional "0x" prefix is accepted.

    Raises:
        ValueError: If the text is not an even number of hex digits
    """
    cleaned = "".join(text.split())
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError:
        raise ValueError(f"Input is not valid hex: {text[:32]!r}") from None


def yes_no(value: bool) -> str:
    return "yes" if value else "no"


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="pngchunk")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Encode and decode PNG chunk records.

    A chunk is a 4-byte length, a 4-letter type, the data, and a CRC-32
    over type and data.

    \b
    Commands:
      encode    Build a chunk from a type and a message
      decode    Decode a chunk and print its contents
      type      Show the property bits of a chunk type

    \b
    Examples:
      pngchunk encode RuSt "secret message"
      pngchunk decode 000000...
      pngchunk type RuSt
    """
    ctx.verbose = verbose
    ctx.config.setup_logging(verbose)


# =============================================================================
# Encode Command
# =============================================================================

@main.command("encode")
@click.argument("chunk_type")
@click.argument("message")
@click.option(
    "-f", "--format",
    "output_format",
    type=click.Choice(["hex", "raw"]),
    default=None,
    help="Output format: hex text or raw bytes (default: hex, or $PNGME_OUTPUT)",
)
@pass_context
def cmd_encode(
    ctx: Context,
    chunk_type: str,
    message: str,
    output_format: Optional[str],
) -> None:
    """
    Build a chunk record from CHUNK_TYPE and MESSAGE.

    CHUNK_TYPE must be 4 ASCII letters. MESSAGE is stored as UTF-8.

    \b
    Examples:
      pngchunk encode RuSt "hello"
      pngchunk encode -f raw RuSt "hello" > chunk.bin
    """
    try:
        chunk = Chunk.from_strings(chunk_type, message)
        if not chunk.chunk_type.is_valid():
            click.echo(
                f"Warning: chunk type '{chunk_type}' has its reserved bit set; "
                f"decoders will reject it",
                err=True,
            )

        wire = chunk.encode()
        logger.debug(f"Encoded {chunk.length} data bytes into {len(wire)} byte chunk")

        if output_format is None:
            output_format = ctx.config.output_format

        if output_format == "raw":
            click.get_binary_stream("stdout").write(wire)
        else:
            click.echo(wire.hex())

    except Exception as e:
        handle_cli_exception(e, ctx.verbose, "Encode")


# =============================================================================
# Decode Command
# =============================================================================

@main.command("decode")
@click.argument("hex_data", required=False)
@click.option(
    "--raw",
    is_flag=True,
    help="Read raw bytes from stdin instead of hex text",
)
@pass_context
def cmd_decode(ctx: Context, hex_data: Optional[str], raw: bool) -> None:
    """
    Decode a chunk record and print its contents.

    HEX_DATA is the record as hex. When omitted, the record is read from
    stdin: hex text by default, raw bytes with --raw. Bytes after the
    record are ignored.

    \b
    Examples:
      pngchunk decode 00000005527553746865...
      pngchunk decode --raw < chunk.bin
    """
    try:
        if hex_data is not None:
            data = parse_hex(hex_data)
        elif raw:
            data = click.get_binary_stream("stdin").read()
        else:
            data = parse_hex(click.get_text_stream("stdin").read())

        chunk, end = Chunk.from_bytes(data)

        click.echo(f"Type:    {chunk.chunk_type}")
        click.echo(f"Length:  {chunk.length}")
        click.echo(f"CRC:     {chunk.crc()} (0x{chunk.crc():08X})")
        try:
            click.echo(f"Message: {chunk.data_as_string()}")
        except PayloadDecodeError:
            click.echo(f"Data:    {chunk.data.hex()} (not UTF-8)")

        if end < len(data):
            click.echo(f"Ignored {len(data) - end} trailing bytes")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose, "Decode")


# =============================================================================
# Type Command
# =============================================================================

@main.command("type")
@click.argument("chunk_type")
@pass_context
def cmd_type(ctx: Context, chunk_type: str) -> None:
    """
    Show the property bits of CHUNK_TYPE.

    \b
    Example:
      pngchunk type RuSt
    """
    try:
        tag = ChunkType.from_str(chunk_type)
        flags = tag.describe()

        click.echo(f"Chunk type:     {tag}")
        click.echo(f"Bytes:          {', '.join(str(b) for b in tag.to_bytes())}")
        click.echo(f"Critical:       {yes_no(flags['critical'])}")
        click.echo(f"Public:         {yes_no(flags['public'])}")
        click.echo(f"Reserved bit:   {'valid' if flags['reserved_bit_valid'] else 'invalid'}")
        click.echo(f"Safe to copy:   {yes_no(flags['safe_to_copy'])}")
        click.echo(f"Valid:          {yes_no(flags['valid'])}")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


if __name__ == "__main__":
    main()
