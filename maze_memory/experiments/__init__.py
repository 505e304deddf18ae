"""Experiment entrypoints."""
