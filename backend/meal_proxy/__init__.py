"""Meal Proxy: caching proxy for TheMealDB."""
