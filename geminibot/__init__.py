"""Discord slash-command bot backed by Gemini and OpenWeatherMap."""

__version__ = "0.1.0"
