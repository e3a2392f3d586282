"""
Generic CRUD server.

Register a SQLAlchemy entity and a Pydantic transfer object once and get a
repository plus a FastAPI endpoint group for list, get, create, update,
delete and field search.
"""

__version__ = "0.1.0"
