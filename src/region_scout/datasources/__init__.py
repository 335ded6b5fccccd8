"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, transport wrapper
    ├── models.py         # Dataclasses for API responses (optional)
    └── {feature}.py      # Query builders, parsers, fetch functions

Sources:
  - overpass/   Tag-based spatial queries (regions, cities, tourism nodes)
  - nominatim/  Relation id -> named place lookup
  - weather/    Open-Meteo archive (historical daily temperatures)

Every client turns transport failures into an empty payload and logs them;
callers treat "empty" as "nothing found".
"""
