"""Dash frontend for the Disaster Risk Early Warning System."""
