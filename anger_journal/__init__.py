"""
Anger Journal - a journaling service with cognitive distortion detection.

This package records structured anger management journal entries, flags
cognitive distortion patterns in their free text, and aggregates the records
into summary statistics served over HTTP.
"""

__version__ = "0.1.0"
