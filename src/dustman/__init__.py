"""Automatic closing of inactive browser tabs."""
