"""Cumulative opportunity accessibility from travel-time surfaces."""
