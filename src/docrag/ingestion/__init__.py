"""
Ingestion — text extraction, chunking, and optional embedding.

This module turns uploaded files (plain text, PDF, DOCX) into cleaned text
and then into the ordered chunks the document store keeps.
"""
