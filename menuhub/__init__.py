"""menuhub: multi-tenant restaurant digital menu service.

Resolves a public menu link to a restaurant's isolated hosted project and
serves its aggregated menu.
"""

__version__ = "1.0.0"
