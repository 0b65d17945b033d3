"""Partitioning of the input stream into bounded frequency parts."""
