"""Core decoding components."""
