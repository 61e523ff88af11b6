"""
NeuroCare therapy backend.

Vibration therapy session tracking: live session control with device
feedback, persisted session history, and rule-based recommendations.
"""

__version__ = "0.1.0"
