"""Scan pipeline engines: inventory -> enrichment -> report."""
