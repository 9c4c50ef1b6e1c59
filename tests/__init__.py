"""Test suite for the Fair Elections report parser.

Organized into:
    - unit/: column layouts, pages, rows, records and normalization helpers
    - integration/: whole-document parsing and export views
"""
