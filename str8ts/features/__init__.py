"""Structural features derived from a grid."""
