"""
Infrastructure adapters for the membership bounded context.

Each repository implements a domain port (ABC) on top of
SQLAlchemy Core and the shared Database engine.
"""
