"""
Transfer Form Models

Validation results for the transfer form and the outcome the transfer
flow hands back to the view.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from novabank.models.account import Transaction


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_amount', 'insufficient_funds')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating the transfer form."""

    amount: Optional[Decimal] = Field(
        default=None,
        description="Parsed amount, when it could be parsed"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def first_error(self) -> Optional[str]:
        """The message the form shows above its fields."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None


class TransferOutcome(BaseModel):
    """What the transfer view needs after a submit."""

    succeeded: bool
    error_message: Optional[str] = None
    transaction: Optional[Transaction] = None
