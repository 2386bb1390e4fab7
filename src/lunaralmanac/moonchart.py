"""CLI entry point for the moon phase calendar.

Edit the where/month variables at the top, then run:
    uv run python src/lunaralmanac/moonchart.py

Leave `where` empty to skip the astronomy API call (no key needed).
"""

import logging
from datetime import date

from dotenv import load_dotenv

load_dotenv()

from lunaralmanac.client import AstronomyClient, AstronomyFetchError  # noqa: E402
from lunaralmanac.display import (  # noqa: E402
    format_illumination,
    format_time,
    phase_icon,
)
from lunaralmanac.moonphase import current_phase, month_calendar  # noqa: E402
from lunaralmanac.renderers.static import save_static_calendar  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

where = "Busan, South Korea"
month = date.today().replace(day=1)

tonight = current_phase()
print(
    f"{tonight.date}: {phase_icon(tonight.phase_name)} {tonight.phase_name}, "
    f"{format_illumination(tonight.illumination * 100)}"
)

path = save_static_calendar(month_calendar(month.year, month.month))
print(f"Saved: {path}")

if where:
    try:
        record = AstronomyClient.from_env().by_location(where)
    except AstronomyFetchError as e:
        logging.getLogger(__name__).error("%s", e)
    else:
        print(
            f"{record.location.city}: sunrise {format_time(record.sun.sunrise)}, "
            f"sunset {format_time(record.sun.sunset)}, "
            f"moon {record.moon.phase} ({format_illumination(record.moon.illumination)})"
        )
