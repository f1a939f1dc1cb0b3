"""Asyncio framework for Stream Deck style button-grid applications: themes, button rendering, views, navigation, plugins and the event loop."""

__version__ = "0.2.1"