"""Categorical mapping tables for dropdown matching.

Each table maps a canonical key to the textual variants a site may use for
it. Variants are compared after normalization, so punctuation and case in
these literals do not matter. State/province has no table; see
``OptionMatcher.match_state``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

MappingTable = Mapping[str, tuple[str, ...]]

COUNTRY_MAPPINGS: MappingTable = MappingProxyType(
    {
        "US": ("USA", "United States", "United States of America", "US", "U.S.", "U.S.A.", "America", "+1"),
        "CA": ("Canada", "CA", "CAN", "+1"),
        "GB": ("United Kingdom", "UK", "Great Britain", "GB", "GBR", "England", "+44"),
        "IN": ("India", "IN", "IND", "+91"),
        "AU": ("Australia", "AU", "AUS", "+61"),
        "DE": ("Germany", "DE", "DEU", "Deutschland", "+49"),
        "FR": ("France", "FR", "FRA", "+33"),
        "JP": ("Japan", "JP", "JPN", "+81"),
        "CN": ("China", "CN", "CHN", "PRC", "+86"),
        "BR": ("Brazil", "BR", "BRA", "+55"),
        "MX": ("Mexico", "MX", "MEX", "+52"),
        "ES": ("Spain", "ES", "ESP", "España", "+34"),
        "IT": ("Italy", "IT", "ITA", "Italia", "+39"),
        "NL": ("Netherlands", "NL", "NLD", "Holland", "+31"),
        "SE": ("Sweden", "SE", "SWE", "+46"),
        "NO": ("Norway", "NO", "NOR", "+47"),
        "DK": ("Denmark", "DK", "DNK", "+45"),
        "FI": ("Finland", "FI", "FIN", "+358"),
        "PL": ("Poland", "PL", "POL", "+48"),
        "IE": ("Ireland", "IE", "IRL", "+353"),
        "NZ": ("New Zealand", "NZ", "NZL", "+64"),
        "SG": ("Singapore", "SG", "SGP", "+65"),
        "KR": ("South Korea", "Korea", "KR", "KOR", "Republic of Korea", "+82"),
        "ZA": ("South Africa", "ZA", "ZAF", "+27"),
    }
)

PHONE_TYPE_MAPPINGS: MappingTable = MappingProxyType(
    {
        "mobile": ("mobile", "cell", "cellular", "cell phone", "mobile phone", "personal"),
        "home": ("home", "house", "residence", "residential"),
        "work": ("work", "office", "business"),
        "other": ("other", "alternate", "alternative"),
    }
)

BOOLEAN_MAPPINGS: MappingTable = MappingProxyType(
    {
        "true": ("yes", "y", "true", "1", "authorized", "eligible", "approved"),
        "false": ("no", "n", "false", "0", "not authorized", "ineligible", "not approved"),
    }
)
