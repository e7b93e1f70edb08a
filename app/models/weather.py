"""Display values derived from a weather API payload."""

from datetime import datetime

from pydantic import BaseModel

from app.logging_config import logger
from app.models.conditions import category_for, gradient_for

LOCALTIME_FORMAT = "%Y-%m-%d %H:%M"
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def format_long_date(moment: datetime) -> str:
    """Format as English long month and numeric day, e.g. "January 1"."""
    return f"{MONTHS[moment.month - 1]} {moment.day}"


def format_12h_time(moment: datetime) -> str:
    """Format as a 12-hour clock time, e.g. "1:00 PM"."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


class Stat(BaseModel):
    """One entry of the stats list."""

    icon: str
    value: str

    @property
    def src(self) -> str:
        return f"/img/icons/{self.icon}.svg"


class WeatherView(BaseModel):
    """Everything the page shows for one weather payload."""

    title: str
    name: str
    country: str
    temperature: str
    condition: str
    condition_category: str
    gradient: str
    date_attr: str
    time_attr: str
    date: str
    time: str
    stats: list[Stat]

    @classmethod
    def from_api_response(cls, api_data: dict) -> "WeatherView":
        """Create a WeatherView from the external API payload.

        Args:
            api_data: Payload with `location` and `current` objects.

        Returns:
            A populated WeatherView.
        """
        location = api_data["location"]
        current = api_data["current"]
        condition = current["condition"]
        localtime = location["localtime"]
        date_attr, _, time_attr = localtime.partition(" ")
        try:
            moment = datetime.strptime(localtime, LOCALTIME_FORMAT)
        except ValueError:
            logger.warning("LOCALTIME_UNPARSED", localtime=localtime)
            date, time = date_attr, time_attr
        else:
            date, time = format_long_date(moment), format_12h_time(moment)
        return cls(
            title=f"Weather forecast in {location['name']}, {location['country']}",
            name=location["name"],
            country=location["country"],
            temperature=f"{current['temp_f']}°F",
            condition=condition["text"],
            condition_category=category_for(condition.get("code")),
            gradient=gradient_for(condition),
            date_attr=date_attr,
            time_attr=time_attr,
            date=date,
            time=time,
            stats=[
                Stat(icon="wind", value=f"{current['wind_mph']} mph"),
                Stat(icon="humidity", value=f"{current['humidity']}%"),
                Stat(icon="pressure", value=f"{current['pressure_mb']} mb"),
            ],
        )
