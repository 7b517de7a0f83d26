"""
Outcome reporters.
"""
