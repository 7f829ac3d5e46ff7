"""Helpers for XLSX workbooks: coordinates, formulas, rich text, shared strings, relationships and sheet truncation."""

__version__ = "0.1.0"

__all__ = ["coords", "formula", "richtext", "reftable", "relations", "truncate"]