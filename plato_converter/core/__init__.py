"""Core data model and turn extraction.

WHY: The core package holds the pieces every conversion shares: the
Turn/Message dataclasses and the extraction of turns from Plato HTML.

HOW: ir.py defines the data structures, extractor.py reads them out of
parsed dialogue containers.

RULES:
- IR dataclasses are the contract between converters; change with care
- Extraction is conversion-agnostic: no role logic or text formatting here
"""
