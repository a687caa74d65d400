"""
Core domain models, integer math primitives, and invariants.

This module contains the foundational building blocks that are independent
of collaborators (token ledgers, event sinks, etc.).
"""
