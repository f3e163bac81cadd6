# hootspot/__init__.py
"""
HootSpot: aligns LLM manipulation-pattern findings with the source text
and lays them out for the highlighted report and bubble chart.
"""

__version__ = "0.4.0"
