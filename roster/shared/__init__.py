"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error code translation and HTTP mapping
- Security middleware
- Rate limiting
- Logging configuration
"""
