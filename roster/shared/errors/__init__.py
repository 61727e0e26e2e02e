"""
Shared error handling package.

Centralizes error-to-code translation so that domain errors
are consistently turned into API error responses.
"""
