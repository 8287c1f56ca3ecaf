"""
PNGme Command-Line Interface
============================

This package provides the command-line tool for the chunk codec:

- **pngchunk**: Encode, decode and inspect chunk records

The tool is implemented as a Click-based CLI application with
help text and consistent exit codes.
"""

__all__ = ["pngchunk"]
