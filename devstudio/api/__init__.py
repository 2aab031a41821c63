"""
API module - HTTP layer.

Routes validate input, call services and shape responses; they hold no
business logic of their own.
"""
