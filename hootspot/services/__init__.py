# hootspot/services/__init__.py
"""
Business logic: highlighting, bubble layout, parsing and report assembly.
"""
