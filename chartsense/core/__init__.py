"""
Core settings and logging for the analysis engine.
"""
