"""
Teller Error Taxonomy

Domain-specific errors raised by the teller operations. Every error carries
the console message shown to the user and a short reason code used in
structured logs. The controller catches them at its public operations, so
none of them escape an interactive session.
"""

from typing import Optional


class AtmError(Exception):
    """Base class for all teller errors"""

    user_message = "Operation failed."
    reason = "error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)
        self.detail = detail or self.user_message


class AuthenticationFailure(AtmError):
    """Entered PIN does not match the account secret. Ends the session."""

    user_message = "Invalid PIN."
    reason = "authentication_failure"


class InsufficientFunds(AtmError):
    """Withdrawal amount exceeds the current balance"""

    user_message = "Insufficient funds."
    reason = "insufficient_funds"


class InvalidAmount(AtmError, ValueError):
    """
    Amount is not accepted for a balance mutation:
    - zero or negative
    - above the configured maximum transaction amount
    """

    user_message = "Invalid amount."
    reason = "invalid_amount"


class InvalidCurrencyCode(AtmError, ValueError):
    """Currency code is not present in the rate table"""

    user_message = "Invalid currency."
    reason = "invalid_currency"


class InvalidMenuChoice(AtmError, ValueError):
    """Menu selection outside the known options"""

    user_message = "Invalid choice. Try again."
    reason = "invalid_menu_choice"
