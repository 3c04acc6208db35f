"""HTTP surface: dependencies and routes."""
