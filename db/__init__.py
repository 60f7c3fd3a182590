"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema creation and the sample dataset.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
