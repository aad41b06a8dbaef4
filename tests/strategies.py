"""
Hypothesis strategies for menuhub.

Reusable generators for slugs, display names and exchange rates.
"""

import string

from hypothesis import strategies as st

# Lowercase hyphenated slugs as they appear in public menu links
slug_strategy = st.text(
    alphabet=string.ascii_lowercase + string.digits + "-",
    min_size=1,
    max_size=40,
).filter(lambda s: s.strip("-") != "")

# Restaurant display names: words of letters and digits separated by single spaces
display_name_strategy = st.lists(
    st.text(alphabet=string.ascii_letters + string.digits + "àèëçé", min_size=1, max_size=12),
    min_size=1,
    max_size=5,
).map(" ".join)

# Positive, finite exchange rates in a realistic range
rate_strategy = st.floats(min_value=0.001, max_value=1000.0, allow_nan=False, allow_infinity=False)

# Prices in cents-precision range
price_strategy = st.floats(min_value=0.0, max_value=100000.0, allow_nan=False, allow_infinity=False)

currency_strategy = st.sampled_from(["ALL", "EUR", "USD", "GBP", "CHF"])
