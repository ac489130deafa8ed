"""Core domain layer: record types, stores, exceptions and logging."""
