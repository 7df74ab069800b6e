"""Disaster Risk Early Warning System backend."""
