"""Domain core: errors, query models and services."""
