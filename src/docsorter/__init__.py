"""DocSorter - metadata extraction and filename quality rating for documents.

This package provides an LLM-backed metadata extraction service, a
deterministic quality rating service for suggested filenames, and the
supporting validators and string similarity utilities.
"""
