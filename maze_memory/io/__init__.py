"""Run-log schemas and output path helpers."""
