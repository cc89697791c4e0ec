"""Vaccination appointment booking backend."""
