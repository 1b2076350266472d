"""
Vehicle catalog.

Responsibilities:
- Normalize a raw car export into the canonical catalog CSV (offline).
- Load the processed catalog into memory once.
- Answer hard-filter queries and single-vehicle lookups for the recommender.
"""
