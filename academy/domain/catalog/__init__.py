"""Catalog bounded context: programs, modules, courses, lessons and their materials."""
