"""Folio API: profiles, posts and projects with likes and comments."""

__version__ = "1.0.0"
