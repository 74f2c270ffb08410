"""
Chart Measure: a distance measurement tool for time-series charts.
"""

__version__ = "0.1.0"
