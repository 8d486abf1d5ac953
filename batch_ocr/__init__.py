"""Batch OCR service: classify uploaded files and extract their text."""
