"""
Core domain models, price math, error taxonomy and snapshot contracts.

This module contains the building blocks shared by the farm grid,
the shop and the session layers.
"""
