# trendscout/analysis/sourcing.py

"""Static supplier catalog with per-product search links."""

from urllib.parse import quote

from trendscout.config.settings import Settings
from trendscout.models.analysis import SourcingOption

# Same reserved set as JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def sourcing_options(title: str) -> list[SourcingOption]:
    """Return one option per catalog supplier, searching for *title*."""
    query = quote(title, safe=_URI_COMPONENT_SAFE)
    return [
        SourcingOption(
            supplier=entry["supplier"],
            url=entry["url"].format(query=query),
            avg_price=entry["avg_price"],
            shipping_time=entry["shipping_time"],
            reliability=entry["reliability"],
        )
        for entry in Settings.SOURCING_CATALOG
    ]
