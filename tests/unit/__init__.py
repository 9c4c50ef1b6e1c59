"""Unit tests for individual parser modules."""
