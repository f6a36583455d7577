"""Materialized-path trees for SQLAlchemy models.

Keeps a ``path``/``level``/``parent_id`` triple consistent on every row of a
flat table so that ancestry and subtree queries become simple prefix and
membership predicates, and rebuilds navigable in-memory trees from the flat
rows those queries return.
"""

__version__ = "0.1.0"
