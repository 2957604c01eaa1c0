"""Catalog maintenance scripts."""
