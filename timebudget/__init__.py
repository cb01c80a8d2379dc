"""
Time tracking, budget overview and import pipeline for project hours.
"""

__version__ = "0.1.0"
