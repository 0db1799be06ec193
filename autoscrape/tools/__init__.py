"""Authoring tools that help write job files."""
