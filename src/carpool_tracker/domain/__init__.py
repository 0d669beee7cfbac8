"""Domain layer for Carpool Tracker.

Contains the value objects, entities and filter predicates.
This layer has no dependencies on storage or presentation concerns.
"""
