"""Merging of saved parts into the final frequency report."""
