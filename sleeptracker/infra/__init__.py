"""Infrastructure layer - storage implementations.

This layer contains:
- SQLite database construction, schema versioning and migrations
- Data-access objects

Allowed imports:
- core/ contexts
- config/ and utils/
- sqlite3 and other storage libraries

Author: Michael Economou
Date: 2026-10-12
"""
