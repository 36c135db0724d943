"""
API layer for the job analysis service.

Contains:
- job_analysis: POST /api/job-analysis route and app factory
"""

from src.api.job_analysis import create_app, router

__all__ = ["create_app", "router"]
