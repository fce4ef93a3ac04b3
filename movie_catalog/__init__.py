"""Movie Catalog: role-gated movie CRUD over FastAPI"""
