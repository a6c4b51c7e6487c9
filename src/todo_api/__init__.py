"""
Todo API package.

A FastAPI service exposing CRUD operations for todo items over a pluggable
repository; the bundled backend is a thread-safe in-memory store.
"""
