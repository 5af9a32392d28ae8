"""HTTP layer for Feedlizer.

``client`` holds the async request abstraction used by the providers;
``api`` holds the FastAPI endpoints consumed by the swipe front end.
"""
