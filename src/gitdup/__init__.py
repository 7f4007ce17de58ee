"""Duplicate a git project into an isolated sibling workspace."""
