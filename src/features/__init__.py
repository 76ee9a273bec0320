"""
Features module - Vertical Feature Organization

Each feature module contains all related code organized by layer:
- domain/: Value objects and pure logic (no Qt)
- application/: Services driving the domain from events and timers

Features:
- day_grid/: One cell per second of the day, filled as wall-clock time passes
"""
