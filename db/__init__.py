"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization and id sequences.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
