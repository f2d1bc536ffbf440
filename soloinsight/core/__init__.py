"""
core package
--------------------
Shared infrastructure for Solo Insight: exceptions, logging, paths,
configuration and input validation.
"""
