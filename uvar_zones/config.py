"""Configuration for the emission zone pipeline"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
BASE_DIR = Path.cwd()
DATA_DIR = BASE_DIR / "data"

# Source document
# The feed is published as a DATEX II urbanVehicleAccessRegulation (UVAR) XML file
EMISSION_ZONES_URL = os.getenv("EMISSION_ZONES_URL", "")
EMISSION_ZONES_FILE = Path(os.getenv("EMISSION_ZONES_FILE", str(DATA_DIR / "emission-zones.xml")))

# API settings
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "60"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
RETRY_DELAY = float(os.getenv("RETRY_DELAY", "5"))

# Transformation settings
NAME_LANGUAGE = os.getenv("NAME_LANGUAGE", "nl")
LABEL_MODE = os.getenv("LABEL_MODE", "fixed")  # fixed or detailed
SPLIT_MULTIPOLYGONS = os.getenv("SPLIT_MULTIPOLYGONS", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Netherlands bounding envelope, used to detect lat/lon vs lon/lat order
NL_BOUNDS = {
    "min_lat": 50.5,
    "max_lat": 53.7,
    "min_lon": 3.2,
    "max_lon": 7.3,
}

# Amsterdam, used when there are no zones to fit the map to
DEFAULT_MAP_CENTER = (52.3676, 4.9041)

# Placeholders
UNKNOWN_CITY_NAME = "Onbekende Stad {index}"
UNKNOWN_CITY_TOKEN = "Onbekend"

# Fixed labels shown for every zone
DEFAULT_RESTRICTIONS = ("Dieselvoertuigen", "Oude voertuigen")
DEFAULT_EXEMPTIONS = ("Elektrische voertuigen", "Waterstof voertuigen", "Oldtimers")
