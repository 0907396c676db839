"""
Domain layer - Records, validators, error taxonomy, models, schemas, and enums.
"""

from domain import enums, errors, result, validators, models, schemas

__all__ = ["enums", "errors", "result", "validators", "models", "schemas"]
