"""Matches feature: 1-on-1 match lifecycle and settlement."""
