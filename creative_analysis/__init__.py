"""
Creative Analysis Backend Package.

FastAPI service layer for the marketing dashboard's creative analysis
engine: headline feature extraction, policy validation, peer-relative
scoring and headline/image recommendations.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, policy spec cache, upstream client, dependencies
    - models: Pydantic schemas and enums
    - services: Business logic services
"""

__version__ = "1.0.0"
