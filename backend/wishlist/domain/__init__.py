"""
Domain Layer

Pure wishlist business rules. Nothing in this package performs I/O.
"""
