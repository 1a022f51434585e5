"""
API and domain models.

Pydantic schemas shared between the API layer and the pipeline.
"""
