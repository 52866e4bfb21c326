"""
Pydantic schemas for reports.
"""
