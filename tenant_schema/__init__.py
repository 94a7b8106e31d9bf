"""Canonical tenant paths, change filtering, and legacy-collection cleanup for Firestore."""

__version__ = "1.0.0"
