"""Table-driven CRUD gateway over PostgreSQL."""
