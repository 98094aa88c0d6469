"""Thin wrappers over the google-cloud-storage SDK."""
