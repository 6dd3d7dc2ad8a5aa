"""Weather-driven activity rankings.

Search a city, fetch its 7-day Open-Meteo forecast and score Skiing,
Surfing, OutdoorSightseeing and IndoorSightseeing from it.
"""

__version__ = "0.1.0"
