"""Download disposition decisions."""
