"""Shared helpers for YAML handling and output files."""
