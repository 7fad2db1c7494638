"""Audit logging package."""

from novabank.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
