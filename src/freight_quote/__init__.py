"""Freight quote engine: location resolution, distance and pricing."""
