"""Recency-weighted card rankings and deck search over tournament records."""
