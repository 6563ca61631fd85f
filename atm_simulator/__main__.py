#!/usr/bin/env python3
"""
ATM Simulator Entry Point

Builds the account and rate table from configuration and runs one
interactive teller session on the console.
"""

import sys

from .accounts import Account
from .config import AtmConfig, get_config
from .currency import CurrencyTable
from .logging_config import setup_logging
from .teller import TellerController


def build_account(config: AtmConfig) -> Account:
    """Open the session account from configuration"""
    return Account(config.pin, config.opening_balance, config.base_currency)


def main() -> int:
    """Run one teller session and return the exit status"""
    config = get_config()
    setup_logging(config.log_level, "atm", config.log_format)

    currency_table = CurrencyTable(config.rates, base_code=config.base_currency)
    controller = TellerController(currency_table, config)
    return controller.run(build_account(config))


if __name__ == "__main__":
    sys.exit(main())
