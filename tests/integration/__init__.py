"""Integration tests that parse complete synthetic reports."""
