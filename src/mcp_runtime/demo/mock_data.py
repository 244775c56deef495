"""Date/time and mock data demo tools.

The random source is owned by a MockDataTools instance so tests can seed it.
"""

import random
import uuid
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..models import HandlerDescriptor, ParamSpec
from ..server.registry import CapabilityRegistry

WEATHER_CONDITIONS = ("Sunny", "Cloudy", "Rainy", "Partly Cloudy", "Snowy", "Windy")


def get_current_time(timezone: Optional[str] = None) -> dict[str, str]:
    """Get the current date and time in a timezone.

    Args:
        timezone: IANA timezone name (default: system timezone)

    Returns:
        Dictionary with datetime, date, time, timezone, and day_of_week

    Raises:
        ValueError: If the timezone is unknown
    """
    if timezone:
        try:
            zone = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {timezone}") from e
        now = datetime.now(zone)
        zone_name = timezone
    else:
        now = datetime.now().astimezone()
        zone_name = now.tzname() or "local"

    return {
        "datetime": now.replace(tzinfo=None).isoformat(),
        "date": now.date().isoformat(),
        "time": now.time().isoformat(),
        "timezone": zone_name,
        "day_of_week": now.strftime("%A").upper(),
    }


def generate_uuid() -> str:
    return str(uuid.uuid4())


def sort_numbers(numbers: list[float], order: Optional[str] = None) -> list[float]:
    return sorted(numbers, reverse=(order or "").lower() == "desc")


class MockDataTools:
    """Tools returning random mock data.

    Args:
        rng: Random source (default: a fresh unseeded ``random.Random``)
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def get_weather(self, city: str, unit: Optional[str] = None) -> dict[str, Any]:
        """Return mock weather data for a city."""
        temp_celsius = self.rng.randint(-5, 29)
        condition = self.rng.choice(WEATHER_CONDITIONS)
        humidity = self.rng.randint(30, 89)

        fahrenheit = (unit or "").lower() == "fahrenheit"
        temperature = temp_celsius * 9.0 / 5.0 + 32 if fahrenheit else float(temp_celsius)

        return {
            "city": city,
            "temperature": round(temperature, 1),
            "unit": "°F" if fahrenheit else "°C",
            "condition": condition,
            "humidity": f"{humidity}%",
            "note": "This is mock data for demonstration purposes",
        }

    def roll_dice(self, count: int, sides: Optional[int] = None) -> dict[str, Any]:
        """Roll ``count`` dice with ``sides`` sides each (default 6)."""
        num_sides = sides if sides is not None else 6
        if count < 1 or count > 100:
            return {"error": "Count must be between 1 and 100"}
        if num_sides < 2 or num_sides > 100:
            return {"error": "Sides must be between 2 and 100"}

        rolls = [self.rng.randint(1, num_sides) for _ in range(count)]
        return {"rolls": rolls, "total": sum(rolls), "dice": f"{count}d{num_sides}"}


def register_mock_data_tools(registry: CapabilityRegistry, rng: Optional[random.Random] = None) -> None:
    """Register the time, weather, dice, uuid, and sorting tools."""
    mock = MockDataTools(rng)

    registry.register(
        HandlerDescriptor.tool(
            "get_current_time",
            "Get the current date and time in a specific timezone",
            [
                ParamSpec(
                    name="timezone",
                    required=False,
                    description="Timezone ID (e.g., 'UTC', 'America/New_York', 'Europe/Stockholm'). "
                    "Defaults to system timezone.",
                )
            ],
        ),
        get_current_time,
    )
    registry.register(
        HandlerDescriptor.tool(
            "get_weather",
            "Get mock weather data for a city (demo purposes)",
            [
                ParamSpec(name="city", description="City name"),
                ParamSpec(name="unit", required=False, description="Temperature unit: celsius or fahrenheit"),
            ],
        ),
        mock.get_weather,
    )
    registry.register(
        HandlerDescriptor.tool(
            "roll_dice",
            "Roll dice with specified number of sides",
            [
                ParamSpec(name="count", type="integer", description="Number of dice to roll"),
                ParamSpec(
                    name="sides",
                    type="integer",
                    required=False,
                    description="Number of sides per die (default: 6)",
                ),
            ],
        ),
        mock.roll_dice,
    )
    registry.register(HandlerDescriptor.tool("generate_uuid", "Generate a random UUID"), generate_uuid)
    registry.register(
        HandlerDescriptor.tool(
            "sort_numbers",
            "Sort a list of numbers",
            [
                ParamSpec(name="numbers", type="array", items="number", description="List of numbers to sort"),
                ParamSpec(name="order", required=False, description="Sort order: asc or desc (default: asc)"),
            ],
        ),
        sort_numbers,
    )
