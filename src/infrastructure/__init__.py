"""
Infrastructure layer - External concerns

This layer contains:
- SQLite preferences database and repository
"""
