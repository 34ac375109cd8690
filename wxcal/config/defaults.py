"""Default WMO weather code table, as published by Open-Meteo."""

from wxcal.calendar.weather_codes import WeatherCategory
from wxcal.config.schema import WeatherCodeRule

DEFAULT_WEATHER_CODE_RULES: list[WeatherCodeRule] = [
    WeatherCodeRule(category=WeatherCategory.CLEAR, codes=[0]),
    WeatherCodeRule(category=WeatherCategory.MOSTLY_CLEAR, codes=[1]),
    WeatherCodeRule(category=WeatherCategory.PARTLY_CLOUDY, codes=[2]),
    WeatherCodeRule(category=WeatherCategory.CLOUDY, codes=[3]),
    WeatherCodeRule(category=WeatherCategory.FOG, codes=[45, 48]),
    # Drizzle (51-55) and freezing drizzle (56-57)
    WeatherCodeRule(category=WeatherCategory.LIGHT_RAIN_SHOWERS, ranges=[(51, 57)]),
    WeatherCodeRule(category=WeatherCategory.RAIN, ranges=[(61, 65), (80, 82)]),
    WeatherCodeRule(category=WeatherCategory.FREEZING_RAIN, ranges=[(66, 67)]),
    WeatherCodeRule(category=WeatherCategory.SNOW, codes=[77], ranges=[(71, 75)]),
    WeatherCodeRule(category=WeatherCategory.HEAVY_SNOW, ranges=[(85, 86)]),
    WeatherCodeRule(category=WeatherCategory.THUNDERSTORM, codes=[95]),
    WeatherCodeRule(category=WeatherCategory.THUNDERSTORM_WITH_HAIL, codes=[96, 99]),
]
