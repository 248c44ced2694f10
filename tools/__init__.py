"""Preset library and other helpers around the simulation."""
