"""
Trip Board - Source Package

A shared, live-updating itinerary board for a group trip: flights,
lodging, day-by-day schedule, checklist, costs, an expense ledger with
group settlement, comments, weather and a playlist link, all kept in a
single shared document.

DESIGN PRINCIPLES:
1. One document, every viewer sees the same state
2. Derived numbers (balances, settlements) are never stored
3. Bad expense input is rejected loudly, never silently fixed
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Trip Board Team"
