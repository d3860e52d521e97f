"""Command line interface for the Pando tools."""
