"""
school_service tests

Covers the backend logic of the School API:

- FastAPI application and routers (`main.py`, `routes/`)
- SQLAlchemy model and store (`models.py`, `db.py`, `store.py`)
- Password hashing and JWT logic (`auth.py`)
- Auth and listing services (`services.py`)
"""
