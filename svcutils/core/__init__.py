"""Web-facing pieces of the toolkit.

Error values, the response envelope, route adapters, middleware factories,
validation, configuration and logging setup.
"""
