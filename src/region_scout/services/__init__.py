"""
Shared service utilities.

- http.py  - ``requests.Session`` factory with retry/backoff (the only place
             where transport retries happen)
"""
