"""
Boundary adapters: database persistence and the device link.
"""
