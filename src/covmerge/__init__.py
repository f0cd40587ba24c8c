"""covmerge - merge Go coverage profiles captured across source revisions."""

__version__ = "0.1.0"
