"""Domain layer: governance models, rules and errors.

Imports nothing from the application or infrastructure layers.
"""
