"""Default asset catalog rows."""

from __future__ import annotations

from signal_core.models import AssetSpec

_ROWS: list[tuple[str, str, str, str, float, float]] = [
    ("EUR/USD", "Euro vs US Dollar", "CURRENCY", "Major", 1.0847, 0.00015),
    ("GBP/USD", "British Pound vs US Dollar", "CURRENCY", "Major", 1.2635, 0.00020),
    ("USD/JPY", "US Dollar vs Japanese Yen", "CURRENCY", "Major", 149.87, 0.015),
    ("USD/CHF", "US Dollar vs Swiss Franc", "CURRENCY", "Major", 0.8758, 0.00018),
    ("AUD/USD", "Australian Dollar vs US Dollar", "CURRENCY", "Major", 0.6525, 0.00022),
    ("USD/CAD", "US Dollar vs Canadian Dollar", "CURRENCY", "Major", 1.3656, 0.00025),
    ("NZD/USD", "New Zealand Dollar vs US Dollar", "CURRENCY", "Major", 0.5989, 0.00030),
    ("EUR/GBP", "Euro vs British Pound", "CURRENCY", "Minor", 0.8591, 0.00025),
    ("EUR/JPY", "Euro vs Japanese Yen", "CURRENCY", "Minor", 162.47, 0.025),
    ("GBP/JPY", "British Pound vs Japanese Yen", "CURRENCY", "Minor", 189.25, 0.030),
    ("S&P500", "S&P 500 Index", "INDEX", "US Indices", 4568.12, 0.5),
    ("NASDAQ", "NASDAQ 100", "INDEX", "US Indices", 14235.78, 1.0),
    ("DOW", "Dow Jones Industrial Average", "INDEX", "US Indices", 34568.45, 2.0),
    ("FTSE100", "FTSE 100 Index", "INDEX", "European Indices", 7457.89, 1.0),
    ("DAX", "DAX 30 Index", "INDEX", "European Indices", 15679.23, 1.5),
    ("NIKKEI", "Nikkei 225 Index", "INDEX", "Asian Indices", 32457.89, 5.0),
    ("GOLD", "Gold Spot", "COMMODITY", "Metals", 2035.78, 0.3),
    ("SILVER", "Silver Spot", "COMMODITY", "Metals", 24.89, 0.02),
    ("OIL", "Crude Oil WTI", "COMMODITY", "Energy", 78.67, 0.03),
    ("BRENT", "Brent Oil", "COMMODITY", "Energy", 82.45, 0.03),
    ("NATGAS", "Natural Gas", "COMMODITY", "Energy", 3.467, 0.005),
    ("BTC/USD", "Bitcoin", "CRYPTO", "Crypto", 43789.45, 15.0),
    ("ETH/USD", "Ethereum", "CRYPTO", "Crypto", 2456.78, 1.5),
    ("LTC/USD", "Litecoin", "CRYPTO", "Crypto", 79.12, 0.1),
    ("XRP/USD", "Ripple", "CRYPTO", "Crypto", 0.5789, 0.001),
    ("AAPL", "Apple Inc.", "STOCK", "Stocks", 189.45, 0.05),
    ("MSFT", "Microsoft Corp.", "STOCK", "Stocks", 378.90, 0.05),
    ("TSLA", "Tesla Inc.", "STOCK", "Stocks", 234.67, 0.08),
    ("OTC_EUR/USD", "Euro vs US Dollar OTC", "OTC", "OTC", 1.0842, 0.0002),
    ("OTC_GOLD", "Gold OTC", "OTC", "OTC", 2033.45, 0.4),
]


def default_catalog() -> list[AssetSpec]:
    """Fresh copy of the built-in catalog."""
    return [
        AssetSpec(
            symbol=symbol,
            name=name,
            asset_class=asset_class,
            category=category,
            base_price=base_price,
            spread=spread,
        )
        for symbol, name, asset_class, category, base_price, spread in _ROWS
    ]
