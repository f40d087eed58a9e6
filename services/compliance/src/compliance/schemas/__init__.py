"""
API schema package for Whisperwire compliance service.

Pydantic request/response models for the call and rule endpoints.
"""
