"""
Transfer Form Validation

Checks what the user typed before the store is asked to move money.
The store repeats the amount checks itself; this layer exists to turn
them into messages a person can act on.

IMPORTANT: Validation never corrects input. A bad amount is reported,
not rounded or clamped.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from novabank.models.transfer import ValidationIssue, ValidationResult


INVALID_AMOUNT_MESSAGE = "Please enter a valid amount greater than zero."
INSUFFICIENT_FUNDS_MESSAGE = "Insufficient funds for this transfer."
MISSING_RECIPIENT_MESSAGE = "Please enter a recipient email or account."


class TransferFormValidator:
    """Validates the recipient and amount fields of the transfer form."""

    def _parse_amount(self, raw_amount: Union[str, Decimal, int, float]) -> Optional[Decimal]:
        if isinstance(raw_amount, bool):
            return None
        try:
            value = Decimal(str(raw_amount).strip())
        except InvalidOperation:
            return None
        return value if value.is_finite() else None

    def validate(
        self,
        recipient: str,
        raw_amount: Union[str, Decimal, int, float],
        balance: Decimal,
    ) -> ValidationResult:
        """
        Validate the form.

        Returns a ValidationResult carrying the parsed amount (when it
        parsed) and any issues, amount issues first.
        """
        issues = []
        amount = self._parse_amount(raw_amount)

        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_amount",
                message=INVALID_AMOUNT_MESSAGE,
            ))
        elif amount > balance:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="insufficient_funds",
                message=INSUFFICIENT_FUNDS_MESSAGE,
            ))

        if not recipient.strip():
            issues.append(ValidationIssue(
                field="recipient",
                issue_type="missing",
                message=MISSING_RECIPIENT_MESSAGE,
            ))

        return ValidationResult(amount=amount, issues=issues)
