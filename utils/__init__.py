"""
utils/ - Shared Utilities
=========================
Logging setup and the error types raised by the reporting layer.
"""
