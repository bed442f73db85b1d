"""lineup: category-scoped builders, template catalogs, and entity registries."""

__version__ = "0.1.0"
