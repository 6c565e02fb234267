"""Domain-level types and rules for metric metadata.

Kept free of web and persistence concerns so services and repositories
share one definition of what a metadata entry is.
"""
