"""
Rendering package for DDL generation.

This package translates the dialect-neutral unified model (schemas, tables,
types, routines, ...) into dialect-specific CREATE / DROP statements.
"""
