"""
Domain Layer

This package contains the core business domain logic, separated from
persistence concerns and infrastructure.

Structure:
- policies/: Pure business rules (age eligibility, movie availability)
- value_objects/: Immutable value types without identity
"""
