"""
Converters
==========
Turn source documents into packet text using the {b}/{i}/{u} markup
conventions the normalizer expects.
"""

from .docx import docx_to_canonical_text

__all__ = ["docx_to_canonical_text"]
