"""
utils package
-------------
Small helpers shared across Solo Insight modules.
"""
