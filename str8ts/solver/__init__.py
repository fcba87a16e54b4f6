"""
Solver module for the Str8ts constraint model.

This module provides the ILP solver wrapper that takes a constraint builder
and produces variable values, and the decoder that turns them into a grid.
"""
