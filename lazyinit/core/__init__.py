"""
Core: accessors, factory, registry, settings
"""
