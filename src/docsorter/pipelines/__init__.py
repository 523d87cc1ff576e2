"""Batch pipelines built on the extraction and quality rating services."""
