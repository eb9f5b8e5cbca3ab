"""Pinning todo lists onto notes."""
