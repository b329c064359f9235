"""Core utilities shared across apps."""
