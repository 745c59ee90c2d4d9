"""Packaged resources for projectseed."""
