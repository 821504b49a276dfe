"""Authentication and ownership authorization.

Learn: Everything with a security contract lives in this package:
1. password.py   → bcrypt hashing of stored credentials
2. jwt.py        → signed, time-bounded bearer tokens
3. identity.py   → token subject (email) → User row
4. dependencies.py → the per-request gate that ties 2 and 3 together
5. ownership.py  → owner-scoped queries for tasks and appointments

Requests flow gate → handler → ownership guard → database.
"""
