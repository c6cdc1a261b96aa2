"""
Service layer: orchestrates the store, the data source and imports.
"""
