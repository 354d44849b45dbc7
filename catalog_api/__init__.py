"""Catalog API: product and category management over HTTP."""
