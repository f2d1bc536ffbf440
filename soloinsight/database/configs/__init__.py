"""
configs package
---------------
Static, configuration-driven tables: persisted slots and achievements.
"""
