import os

import dotenv

dotenv.load_dotenv()

# Initial location shown when the application starts
default_city_name: str = 'Castelfranco Veneto'
default_city_lat: float = 45.6719
default_city_lon: float = 11.9258

# Search-as-you-type behaviour
DEBOUNCE_SECONDS = 0.3
MIN_QUERY_LENGTH = 2
SUGGESTION_COUNT = 5

GEOCODING_URL = os.getenv('WG_GEOCODING_URL', 'https://geocoding-api.open-meteo.com/v1/search')
FORECAST_URL = os.getenv('WG_FORECAST_URL', 'https://api.open-meteo.com/v1/forecast')
HTTP_TIMEOUT = float(os.getenv('WG_HTTP_TIMEOUT', '10'))

log_filename: str = os.getenv('WG_LOG_FILE', 'weather_glance.log')
