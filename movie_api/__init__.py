"""Movie catalog backend.

REST API for a movie catalog:
- Public reads of movies
- Admin-only create/update/delete, gated by a bearer token and the admin flag
- Registration/login issuing 30-day JWTs
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
