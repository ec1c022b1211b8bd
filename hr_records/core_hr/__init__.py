"""Core HR module — Employee and Department models, schemas and services."""

from hr_records.core_hr.models import Department, Employee

__all__ = ["Employee", "Department"]
