"""Generate typed C# GraphQL client operations from a schema and documents."""

__version__ = "0.1.0"
