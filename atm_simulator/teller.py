"""
Teller Controller Module

Runs one console session against one account: PIN check, menu loop and
dispatch of withdraw, deposit, balance, history and rate display. The
account is passed to every operation; the controller keeps only session
state, the rate table and its console I/O callables.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Callable, Optional
from enum import Enum, IntEnum
import uuid

from .accounts import Account
from .config import AtmConfig, get_config
from .currency import CurrencyTable, as_money, decimal_from_string
from .errors import (
    AtmError, AuthenticationFailure, InsufficientFunds, InvalidAmount,
    InvalidCurrencyCode, InvalidMenuChoice
)
from .logging_config import get_logger, log_action
from .transactions import TransactionKind, TransactionRecord


class MenuOption(IntEnum):
    """Menu selections, numbered as shown to the user"""
    WITHDRAW = 1
    DEPOSIT = 2
    BALANCE = 3
    HISTORY = 4
    RATES = 5
    EXIT = 6

    @property
    def label(self) -> str:
        return MENU_LABELS[self]


MENU_LABELS = {
    MenuOption.WITHDRAW: "Withdraw",
    MenuOption.DEPOSIT: "Deposit",
    MenuOption.BALANCE: "Check Balance",
    MenuOption.HISTORY: "View Transactions",
    MenuOption.RATES: "Exchange Rates",
    MenuOption.EXIT: "Exit",
}


class SessionState(Enum):
    """Teller session lifecycle"""
    AWAITING_AUTHENTICATION = "awaiting_authentication"
    MENU = "menu"
    EXITED = "exited"


@dataclass
class Session:
    """Transient state of one interactive run"""
    state: SessionState = SessionState.AWAITING_AUTHENTICATION
    authenticated: bool = False
    current_choice: Optional[MenuOption] = None
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])


class TellerController:
    """
    Console teller for a single account
    """

    PIN_PROMPT = "Enter PIN: "
    CHOICE_PROMPT = "Choose an option: "
    AMOUNT_PROMPT = "Enter amount: "
    NOT_A_NUMBER = "Please enter a number."

    def __init__(
        self,
        currency_table: Optional[CurrencyTable] = None,
        config: Optional[AtmConfig] = None,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None
    ):
        self.config = config or get_config()
        self.currency_table = currency_table or CurrencyTable(
            self.config.rates, base_code=self.config.base_currency
        )
        self._input = input_func or input
        self._output = output_func or print
        self.session = Session()
        self.logger = get_logger("atm.teller")

    # ---------- logging helpers ----------

    def _log(self, level: str, message: str, action: str, resource: str,
             extra: Optional[dict] = None) -> None:
        log_action(
            self.logger, level, message,
            action=action, resource=resource,
            correlation_id=self.session.session_id, extra=extra
        )

    def _reject(self, action: str, error: AtmError) -> None:
        """Report a recoverable failure to the user and the log"""
        self._output(error.user_message)
        self._log(
            "warning", f"{action} rejected: {error.reason}",
            action=action, resource="account",
            extra={"reason": error.reason, "detail": error.detail}
        )

    def _completed(self, action: str, account: Account, record: TransactionRecord) -> None:
        self._log(
            "info", f"{record.kind.value} completed",
            action=action, resource=f"transaction:{record.sequence_number}",
            extra={**record.to_dict(), "balance": str(account.get_balance())}
        )

    # ---------- console input ----------

    def _prompt_int(self, prompt: str) -> int:
        """Read an integer, re-prompting on anything else"""
        while True:
            raw = self._input(prompt)
            try:
                return int(raw.strip())
            except ValueError:
                self._output(self.NOT_A_NUMBER)

    def _prompt_amount(self) -> Decimal:
        """Read a decimal amount, re-prompting on anything else"""
        while True:
            raw = self._input(self.AMOUNT_PROMPT)
            try:
                return decimal_from_string(raw)
            except ValueError:
                self._output(self.NOT_A_NUMBER)

    # ---------- operations ----------

    def _check_amount(self, amount) -> Decimal:
        """
        Normalize an amount and enforce the mutation preconditions

        Raises:
            InvalidAmount: If the amount is not positive or exceeds the limit
        """
        try:
            amount = as_money(amount)
        except ValueError:
            raise InvalidAmount(f"Amount {amount} cannot be represented in cents")
        if amount <= Decimal("0"):
            raise InvalidAmount(f"Amount must be positive, got {amount}")
        if amount > self.config.max_transaction_amount:
            raise InvalidAmount(
                f"Amount {amount} exceeds limit {self.config.max_transaction_amount}"
            )
        return amount

    def authenticate(self, account: Account, pin: int) -> bool:
        """
        Check the entered PIN and move the session out of authentication

        Returns:
            True if the PIN matched and the menu is now open
        """
        if account.validate_secret(pin):
            self.session.authenticated = True
            self.session.state = SessionState.MENU
            self._log("info", "Authentication succeeded",
                      action="authenticate", resource="session")
            return True

        self.session.state = SessionState.EXITED
        self._reject("authenticate", AuthenticationFailure("PIN mismatch"))
        return False

    def withdraw(self, account: Account, amount) -> bool:
        """
        Withdraw an amount in the account currency

        Args:
            account: Account to debit
            amount: Requested amount

        Returns:
            True if the balance was debited and the withdrawal recorded
        """
        try:
            amount = self._check_amount(amount)
            if amount > account.get_balance():
                raise InsufficientFunds(
                    f"Requested {amount}, available {account.get_balance()}"
                )
        except AtmError as e:
            self._reject("withdraw", e)
            return False

        account.update_balance(-amount)
        record = account.record_transaction(
            TransactionKind.WITHDRAWAL, amount, account.currency_code
        )
        self._completed("withdraw", account, record)
        self._output("Withdrawal successful.")
        return True

    def deposit(self, account: Account, amount) -> bool:
        """
        Deposit an amount in the account currency

        Returns:
            True if the balance was credited and the deposit recorded
        """
        try:
            amount = self._check_amount(amount)
        except AtmError as e:
            self._reject("deposit", e)
            return False

        account.update_balance(amount)
        record = account.record_transaction(
            TransactionKind.DEPOSIT, amount, account.currency_code
        )
        self._completed("deposit", account, record)
        self._output("Deposit successful.")
        return True

    def show_balance(self, account: Account) -> None:
        self._output(f"Balance: {as_money(account.get_balance())}")

    def show_history(self, account: Account) -> None:
        self._output("Transaction History:")
        for record in account.list_transactions():
            self._output(record.describe())

    def show_rates(self) -> None:
        for code, rate in self.currency_table.display_rates():
            self._output(f"{code}: {rate}")

    def convert(self, amount, from_code: str, to_code: str) -> Optional[Decimal]:
        """
        Convert an amount between currencies for display

        Returns:
            Converted amount, or None after telling the user a code is unknown
        """
        try:
            return self.currency_table.convert_or_raise(amount, from_code, to_code)
        except InvalidCurrencyCode as e:
            self._reject("convert", e)
            return None

    def show_menu(self) -> None:
        for option in MenuOption:
            self._output(f"{option.value}. {option.label}")

    def dispatch(self, account: Account, choice: int) -> SessionState:
        """
        Run one menu selection

        Args:
            account: Account the session operates on
            choice: Number entered by the user

        Returns:
            Session state after the selection
        """
        try:
            option = MenuOption(choice)
        except ValueError:
            self._reject("menu", InvalidMenuChoice(f"Unknown option {choice}"))
            return self.session.state

        self.session.current_choice = option

        if option is MenuOption.WITHDRAW:
            self.withdraw(account, self._prompt_amount())
        elif option is MenuOption.DEPOSIT:
            self.deposit(account, self._prompt_amount())
        elif option is MenuOption.BALANCE:
            self.show_balance(account)
        elif option is MenuOption.HISTORY:
            self.show_history(account)
        elif option is MenuOption.RATES:
            self.show_rates()
        elif option is MenuOption.EXIT:
            self._output("Goodbye!")
            self.session.state = SessionState.EXITED

        return self.session.state

    def run(self, account: Account) -> int:
        """
        Run a full interactive session

        Prompts for the PIN, then loops over the menu until the user exits
        or input ends.

        Returns:
            Process exit status
        """
        self.session = Session()
        self._log("info", "Session started", action="start_session", resource="session")

        try:
            pin = self._prompt_int(self.PIN_PROMPT)
        except (EOFError, KeyboardInterrupt):
            self.session.state = SessionState.EXITED
            self._log("info", "Session ended before authentication",
                      action="end_session", resource="session")
            return 0

        if self.authenticate(account, pin):
            while self.session.state is SessionState.MENU:
                self.show_menu()
                try:
                    self.dispatch(account, self._prompt_int(self.CHOICE_PROMPT))
                except (EOFError, KeyboardInterrupt):
                    self._output("Goodbye!")
                    self.session.state = SessionState.EXITED

        self._log(
            "info", "Session ended", action="end_session", resource="session",
            extra={
                "authenticated": self.session.authenticated,
                "transactions": account.transaction_count,
            }
        )
        return 0
