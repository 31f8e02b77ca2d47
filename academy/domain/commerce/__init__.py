"""Commerce bounded context: enrollments and payments."""
