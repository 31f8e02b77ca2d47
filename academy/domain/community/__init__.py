"""Community bounded context: lesson discussions and student blog posts."""
