"""Identity bounded context: users and teaching groups."""
