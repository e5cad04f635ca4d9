from strategist.helper.cartographer import (
    Cartographer,
    parse_site_name,
    format_site_name,
    canonical_site_name,
    normalize_site_name,
    site_distance,
)
from strategist.helper.expansion_helpers import (
    parse_cache_entry,
    scored_entries,
    home_sites,
    owned_resource_types,
    resource_bonus,
)


__all__ = [
    "Cartographer",
    "parse_site_name",
    "format_site_name",
    "canonical_site_name",
    "normalize_site_name",
    "site_distance",
    "parse_cache_entry",
    "scored_entries",
    "home_sites",
    "owned_resource_types",
    "resource_bonus",
]
