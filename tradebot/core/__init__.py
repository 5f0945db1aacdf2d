"""tradebot.core

Configuration, errors, logging and the shared HTTP client.
"""
