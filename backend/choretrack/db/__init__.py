"""Database Package — SQLAlchemy declarative base shared by models and migrations."""
