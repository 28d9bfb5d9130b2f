"""
apitranslator - machine-translate selected fields of API responses.

Route handlers return their normal payloads; a middleware picks the target
language from the request and translates the configured fields before the
response is sent.
"""

__version__ = "0.1.0"
