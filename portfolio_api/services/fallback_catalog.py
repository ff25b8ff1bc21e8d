"""Static locations shown even when no records are stored"""

from typing import List

from portfolio_api.schemas.catalog import FallbackLocation

# Approximate city centres
FALLBACK_LOCATIONS = (
    {"id": "guntur", "name": "Guntur", "state_or_country": "Andhra Pradesh", "latitude": 16.3067, "longitude": 80.4365},
    {"id": "hyderabad", "name": "Hyderabad", "state_or_country": "Telangana", "latitude": 17.3850, "longitude": 78.4867},
    {"id": "siddipet", "name": "Siddipet", "state_or_country": "Telangana", "latitude": 18.1048, "longitude": 78.8518},
    {"id": "suryapet", "name": "Suryapet", "state_or_country": "Telangana", "latitude": 17.1406, "longitude": 79.6204},
    {"id": "nirmal", "name": "Nirmal", "state_or_country": "Telangana", "latitude": 19.0969, "longitude": 78.3447},
    {"id": "ireland", "name": "Ireland", "state_or_country": "Ireland", "latitude": 53.3498, "longitude": -6.2603},
)


def get_fallback_catalog() -> List[FallbackLocation]:
    """Fresh copies of the fallback locations"""
    return [FallbackLocation(**entry) for entry in FALLBACK_LOCATIONS]
