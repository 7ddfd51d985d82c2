"""Application layer: ports, DTOs and governance services.

Imports from the domain layer only (plus bandgov.config).
"""
