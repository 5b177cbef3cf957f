import argparse
import logging
import sys
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .config import FORECAST_PERIODS, NEXT_HOURS, PROVIDERS, Colours, settings
from .errors import WeatherRiderError
from .models import CurrentWeather, ForecastPeriod, Route
from .rendering import (
    advisories,
    gear_for,
    next_hours,
    packing_list,
    ride_timeline,
    simulate_ride,
)
from .services import OSRMRouteService, WeatherProvider
from .services.openweather import icon_url
from .storage import LastCityStore
from .utils import (
    describe_wmo,
    format_date,
    format_distance,
    format_duration,
    format_temp,
    format_wind,
    theme_for,
)


def parse_coords(value: str) -> Tuple[float, float]:
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError("expected LAT,LON, e.g. 51.5,-0.12")
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise argparse.ArgumentTypeError("coordinates out of range")
    return lat, lon


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-rider",
        description="Current conditions, the next few hours and ride advice for a place or a trip.",
    )
    parser.add_argument("city", nargs="?", help="place to look up (defaults to the last one searched)")
    parser.add_argument("--to", dest="destination", help="destination for a ride")
    parser.add_argument("--coords", type=parse_coords, help="look up by LAT,LON instead of a name")
    parser.add_argument("--provider", choices=PROVIDERS, default=settings.provider)
    parser.add_argument("--hours", type=int, default=None, help="how many upcoming periods to show")
    parser.add_argument("--imperial", action="store_true", help="°F, mph and miles")
    parser.add_argument("--animate", action="store_true", help="play the simulated ride")
    parser.add_argument("--delay", type=float, default=0.1, help="seconds between animation frames")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


# ----------------------------------------------------------------------
# Output helpers
# ----------------------------------------------------------------------
def _emoji(current: CurrentWeather) -> str:
    if current.source == "open-meteo":
        return describe_wmo(current.condition_code)[0]
    return ""


def print_current(current: CurrentWeather, units: str) -> None:
    print(f"\n{Colours.BOLD}{current.location.label}{Colours.RESET}")
    print(f"{format_date(datetime.now())}")
    print(
        f"\t{_emoji(current)} {format_temp(current.temperature_c, units)}  "
        f"{current.description}"
    )
    print(
        f"\tFeels like {format_temp(current.feels_like_c, units)} | "
        f"Humidity {current.humidity:.0f}% | "
        f"Wind {format_wind(current.wind_speed_ms, units)}"
        + (f" | Pressure {current.pressure_hpa:.0f} hPa" if current.pressure_hpa is not None else "")
    )
    print(f"\tTheme: {theme_for(current.source, current.condition_code)}")
    if current.icon:
        print(f"\tIcon: {icon_url(current.icon)}")


def hours_table(periods: Sequence[ForecastPeriod], units: str) -> pd.DataFrame:
    rows = [
        {
            "Time": f"{p.time:%a %H:%M}",
            "Temp": format_temp(p.temperature_c, units),
            "Feels like": format_temp(p.feels_like_c, units) if p.feels_like_c is not None else "-",
            "Rain": f"{p.precipitation_probability:.0f}%" if p.precipitation_probability is not None else "-",
            "Wind": format_wind(p.wind_speed_ms, units) if p.wind_speed_ms is not None else "-",
            "Conditions": p.description,
        }
        for p in periods
    ]
    return pd.DataFrame(rows, columns=["Time", "Temp", "Feels like", "Rain", "Wind", "Conditions"])


def print_advice(current: CurrentWeather, periods: List[ForecastPeriod], route: Optional[Route]) -> None:
    print(f"\n{Colours.BOLD}Advisories{Colours.RESET}")
    for item in advisories(current, periods):
        colour = Colours.YELLOW if item.level == "warning" else Colours.GREEN
        print(f"\t{colour}{item.text}{Colours.RESET}")

    print(f"\n{Colours.BOLD}Suggested gear{Colours.RESET}")
    for gear in gear_for(current, periods):
        print(f"\t- {gear}")

    print(f"\n{Colours.BOLD}Packing list{Colours.RESET}")
    for item in packing_list(current, periods, route):
        print(f"\t[ ] {item}")


def print_route(route: Route, periods: List[ForecastPeriod], units: str) -> None:
    source = f"{Colours.YELLOW}straight-line estimate{Colours.RESET}" if route.is_estimate else "OSRM"
    print(
        f"\n{Colours.BOLD}Ride {route.start.label} → {route.destination.label}{Colours.RESET} "
        f"({source})"
    )
    print(f"\t{format_distance(route.distance_km, units)}, about {format_duration(route.duration_min)}")

    for point in ride_timeline(route, periods, datetime.now(timezone.utc)):
        weather = (
            f"{format_temp(point.period.temperature_c, units)} {point.period.description}"
            if point.period
            else "no forecast"
        )
        print(f"\t{point.eta.astimezone():%H:%M}  {point.label:<24} {weather}")


def play_ride(route: Route, units: str, delay: float) -> None:
    for frame in simulate_ride(route):
        sys.stdout.write(
            f"\r\t{frame.bar} {frame.percent:3d}%  "
            f"{format_distance(frame.distance_km, units)}  {format_duration(frame.elapsed_min)}   "
        )
        sys.stdout.flush()
        time.sleep(delay)
    print(f"\n\t{Colours.GREEN}Arrived at {route.destination.label}.{Colours.RESET}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    units = "imperial" if args.imperial else "metric"
    store = LastCityStore(settings.state_path)

    try:
        provider = WeatherProvider(args.provider)

        # ------------------------------------------------------------------
        # 1️⃣ Current conditions (by coordinates or by name)
        # ------------------------------------------------------------------
        if args.coords:
            report = provider.report_by_coords(*args.coords)
            if report.location.country:
                store.save(report.location.name)
        else:
            city = args.city if args.city is not None else (store.load() or settings.default_city)
            if not city.strip():
                print(f"{Colours.RED}Please enter a city name{Colours.RESET}")
                return 1
            report = provider.report(city.strip())
            store.save(city)

        print_current(report.current, units)

        # ------------------------------------------------------------------
        # 2️⃣ What the next few hours look like
        # ------------------------------------------------------------------
        default_hours = NEXT_HOURS if report.source == "open-meteo" else FORECAST_PERIODS
        periods = next_hours(report.periods, args.hours if args.hours is not None else default_hours)
        print(f"\n{Colours.BOLD}Next {len(periods)} periods{Colours.RESET}")
        if periods:
            print(hours_table(periods, units).to_string(index=False))
        else:
            print("\tNo data available")

        print(f"\n{Colours.BOLD}Outlook{Colours.RESET}")
        for day in provider.outlook(report):
            print(
                f"\t{day.date:%a %d %b}  {format_temp(day.high_c, units)} / {format_temp(day.low_c, units)}  "
                f"{day.description}"
            )

        # ------------------------------------------------------------------
        # 3️⃣ Optional ride to a destination
        # ------------------------------------------------------------------
        route = None
        if args.destination:
            destination = provider.locate(args.destination)
            route = OSRMRouteService().route(report.location, destination)
            print_route(route, report.periods, units)

        print_advice(report.current, periods, route)

        if route is not None and args.animate:
            print()
            play_ride(route, units, args.delay)

    except WeatherRiderError as exc:
        print(f"{Colours.RED}{exc}{Colours.RESET}")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
