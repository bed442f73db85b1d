"""Service layer: orchestrates builders, catalog, and registry.

Every public service method returns a ServiceResult.
"""
