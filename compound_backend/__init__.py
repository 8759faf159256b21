"""Compound-interest projection backend for the savings calculator page."""
