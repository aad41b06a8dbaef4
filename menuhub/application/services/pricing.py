"""Currency conversion and price formatting for the public menu.

Exchange rates are stored per tenant, each relative to one fixed base
currency, so converting from A to B is ``price / rate[A] * rate[B]``.
A currency missing from the table is treated as parity (rate 1) unless
strict mode is requested.
"""

import logging
import math
from collections.abc import Mapping

from menuhub.core.constants import DEFAULT_ENABLED_CURRENCIES
from menuhub.domain.entities import CurrencySettings
from menuhub.domain.exceptions import ExchangeRateMissing, InvalidExchangeRate

logger = logging.getLogger(__name__)

# code -> (name, symbol)
CURRENCY_OPTIONS: dict[str, tuple[str, str]] = {
    "ALL": ("Albanian Lek", "L"),
    "EUR": ("Euro", "€"),
    "USD": ("US Dollar", "$"),
    "GBP": ("British Pound", "£"),
    "CHF": ("Swiss Franc", "CHF"),
}


def _rate(rates: Mapping[str, float], currency: str, strict: bool) -> float:
    rate = rates.get(currency)
    if rate is None:
        if strict:
            raise ExchangeRateMissing(currency)
        logger.debug("No exchange rate for %s; assuming parity", currency)
        return 1.0
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise InvalidExchangeRate(currency, rate)
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidExchangeRate(currency, rate)
    return float(rate)


def convert_price(
    price: float,
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, float],
    strict: bool = False,
) -> float:
    """Convert price between currencies using a base-relative rate table.

    Args:
        price: Amount in from_currency.
        from_currency: Currency code of price.
        to_currency: Target currency code.
        rates: Rate per currency code, relative to the tenant's base currency.
        strict: Raise ExchangeRateMissing instead of assuming parity.

    Returns:
        Converted amount (not rounded).

    Raises:
        ExchangeRateMissing: strict mode and a currency is not in rates.
        InvalidExchangeRate: A rate is zero, negative or not a finite number.
    """
    if from_currency == to_currency:
        return float(price)
    return price / _rate(rates, from_currency, strict) * _rate(rates, to_currency, strict)


def currency_symbol(currency: str) -> str:
    option = CURRENCY_OPTIONS.get(currency)
    return option[1] if option else currency


def format_price(price: float, currency: str) -> str:
    """Render a price with its currency symbol, two decimals (e.g. ``€ 12.50``)."""
    return f"{currency_symbol(currency)} {price:.2f}"


def enabled_currencies(settings: CurrencySettings | None) -> list[str]:
    """Currencies offered in the menu currency switch (known codes only)."""
    codes = (
        settings.enabled_currencies
        if settings and settings.enabled_currencies
        else DEFAULT_ENABLED_CURRENCIES
    )
    return [c for c in codes if c in CURRENCY_OPTIONS]
