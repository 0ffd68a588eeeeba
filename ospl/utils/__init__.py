"""Helpers shared across ospl."""
