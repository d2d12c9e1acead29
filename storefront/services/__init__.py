"""Services: the resource stores and the bootstrap seeder."""
