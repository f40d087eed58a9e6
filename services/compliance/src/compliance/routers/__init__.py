"""
API router package for Whisperwire compliance service.

Contains the FastAPI router modules for call sessions, the rule
library, and health.
"""
