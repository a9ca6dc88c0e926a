"""
connectn.interfaces - User interfaces for ConnectN

This package contains the text front end and its console observer.
"""

# Don't import anything here to avoid circular imports
__all__ = []
