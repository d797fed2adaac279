"""Shipping address parsing.

Checkout stores the address as a JSON blob whose keys have drifted over time
(``address``/``addressLine1``, ``zip``/``zipCode``...). Readers must tolerate
malformed JSON: a broken blob is treated as an empty address.
"""

import json


def parse_shipping_address(raw) -> dict:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def shipping_country(address: dict) -> str | None:
    """Country code of an address, whichever key checkout used for it."""
    return address.get("country") or address.get("land") or address.get("countryCode") or None
