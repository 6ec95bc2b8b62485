"""HTTP API exposing the catalog operations."""
