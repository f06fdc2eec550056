"""Logging setup for kubemapper."""
