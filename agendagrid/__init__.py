"""
agendagrid - Calendar layout and navigation engine for day, week and month views.
"""

__version__ = "0.1.0"
