"""
Prefect flows for batch searches.

Flows:
- sweep: region search across the tiles of a large bounding box, and
  historical weather across past years

Usage (local):
    python -m region_scout.flows.sweep

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m region_scout.flows.sweep
"""
