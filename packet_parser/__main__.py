"""
Module entry point for: python -m packet_parser

Allows running the parser directly as a module:
    python -m packet_parser parse <packet_path> [options]
    python -m packet_parser batch <directory> [options]
    python -m packet_parser classify <text> [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
