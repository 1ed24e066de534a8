"""depscan: npm dependency inventory, enrichment and reporting."""

__version__ = "0.1.0"
