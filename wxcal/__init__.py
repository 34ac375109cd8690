"""Month-view weather calendar over the Open-Meteo APIs."""

__version__ = "0.1.0"
