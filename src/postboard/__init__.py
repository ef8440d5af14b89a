"""Blog post service exposing the same data access layer over REST and GraphQL."""

__version__ = "0.1.0"
