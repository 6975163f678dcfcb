"""
Todo API package.

The FastAPI application lives in ``todo_api.main`` (``app`` for servers,
``create_app`` for tests and embedding).
"""

__version__ = "0.1.0"
