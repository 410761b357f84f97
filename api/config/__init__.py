"""Configuration module for the HR console API."""

from .settings import settings
from .database import engine, SessionLocal, init_db

__all__ = ["settings", "engine", "SessionLocal", "init_db"]
