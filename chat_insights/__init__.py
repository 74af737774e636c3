"""
Chat Insights - analytics for sales chat conversations.
"""

__version__ = "0.1.0"
