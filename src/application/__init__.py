"""
Application layer - settings and command result types

This layer contains:
- Settings schemas and the persisted settings manager
- CommandResult types returned to the UI
"""
