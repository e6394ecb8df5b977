"""Utilities package for the Recipe Box application."""
