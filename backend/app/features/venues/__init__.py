"""Venues feature: reference geography and geofenced presence."""
