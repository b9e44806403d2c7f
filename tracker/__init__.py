"""
Plant Tracker

Domain logic for the plant watering tracker: records, persistence,
configuration and the API services built on them.
"""

__version__ = "0.1.0"
