"""User directory services: lookup, registration, profile and listings."""
