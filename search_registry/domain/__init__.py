"""Domain layer: value objects and exceptions.

No dependencies on application or infrastructure layers.
"""
