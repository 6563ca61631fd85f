"""
Currency Rate Module

Static exchange-rate table keyed by currency code, conversion between codes,
and Decimal helpers for amounts typed at the console. NEVER uses float for
monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Dict, Iterator, List, Mapping, Optional, Tuple
import re

from .errors import InvalidCurrencyCode
from .logging_config import get_logger, log_action

# Set global decimal context for financial precision
getcontext().prec = 28

DEFAULT_BASE_CURRENCY = "USD"

# Rates against the base currency
DEFAULT_RATES: Dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("0.93"),
    "GBP": Decimal("0.82"),
}

MONEY_QUANTUM = Decimal("0.01")

logger = get_logger("atm.currency")


def as_money(value) -> Decimal:
    """
    Normalize a numeric value to a Decimal with 2 fractional digits

    Raises:
        ValueError: If the value is not a number or has too many digits
    """
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Cannot represent '{value}' as money")


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert console text to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "200", "$1,234.56", "123,45"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to a finite Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[\s$€£¥]', '', value)
    if not clean_value or re.search(r'[^\d.,\-+]', clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') == 1:
        whole, fraction = clean_value.split(',')
        if len(fraction) <= 2:  # decimal separator
            clean_value = f"{whole}.{fraction}"
        else:  # thousands separator
            clean_value = whole + fraction
    elif ',' in clean_value:
        clean_value = clean_value.replace(',', '')

    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if not result.is_finite():
        raise ValueError(f"Cannot convert '{value}' to Decimal")
    return result


class CurrencyTable:
    """
    Read-only mapping of currency code to exchange rate against a base currency
    """

    def __init__(self, rates: Optional[Mapping[str, object]] = None,
                 base_code: str = DEFAULT_BASE_CURRENCY):
        source = DEFAULT_RATES if rates is None else rates
        self._rates: Dict[str, Decimal] = {
            code.upper(): Decimal(str(rate)) for code, rate in source.items()
        }
        self._base_code = base_code.upper()

        if self._rates.get(self._base_code) != Decimal("1"):
            raise ValueError(f"Base currency {self._base_code} must have rate 1.0")
        for code, rate in self._rates.items():
            if rate <= Decimal("0"):
                raise ValueError(f"Rate for {code} must be positive, got {rate}")

    @property
    def base_code(self) -> str:
        return self._base_code

    @property
    def codes(self) -> List[str]:
        return list(self._rates)

    def __contains__(self, code) -> bool:
        return isinstance(code, str) and code.upper() in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def get_rate(self, code: str) -> Optional[Decimal]:
        """Get the rate for a currency code, None if unknown"""
        return self._rates.get(code.upper())

    def convert_or_raise(self, amount: Decimal, from_code: str, to_code: str) -> Decimal:
        """
        Convert an amount between two currencies of the table

        Args:
            amount: Amount in from_code
            from_code: Source currency code
            to_code: Target currency code

        Returns:
            Amount expressed in to_code, at full precision

        Raises:
            InvalidCurrencyCode: If either code is not in the table
        """
        from_rate = self.get_rate(from_code)
        to_rate = self.get_rate(to_code)
        if from_rate is None or to_rate is None:
            unknown = from_code if from_rate is None else to_code
            raise InvalidCurrencyCode(f"Unknown currency code: {unknown}")

        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        if from_code.upper() == to_code.upper():
            return amount
        return (amount / from_rate) * to_rate

    def convert(self, amount: Decimal, from_code: str, to_code: str) -> Optional[Decimal]:
        """
        Convert an amount, returning None when a currency code is unknown

        None is the not-found signal; a legitimate conversion of zero
        returns Decimal zero.
        """
        try:
            return self.convert_or_raise(amount, from_code, to_code)
        except InvalidCurrencyCode as e:
            log_action(
                logger, "warning", "Currency lookup failed",
                action="convert", resource=f"currency:{from_code}->{to_code}",
                extra={"reason": e.reason, "detail": e.detail}
            )
            return None

    def display_rates(self) -> Iterator[Tuple[str, Decimal]]:
        """Yield (code, rate) pairs in table order; each call starts over"""
        for code, rate in self._rates.items():
            yield code, rate

    def __repr__(self) -> str:
        return f"CurrencyTable(base={self._base_code}, codes={self.codes})"
