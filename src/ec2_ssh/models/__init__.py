"""Pydantic models for ec2-ssh."""

from .instance import Instance, Candidate, CacheSnapshot

__all__ = ["Instance", "Candidate", "CacheSnapshot"]
