"""Data fetchers for the emission zone feed"""
from .base_fetcher import BaseFetcher
from .emission_zones_fetcher import EmissionZonesFetcher

__all__ = ["BaseFetcher", "EmissionZonesFetcher"]
