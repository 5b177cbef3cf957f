from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator, List, Optional, Sequence

from ..models import ForecastPeriod, Route

BAR_WIDTH = 30


@dataclass
class Checkpoint:
    label: str
    percent: int
    distance_km: float
    eta: datetime
    period: Optional[ForecastPeriod]


@dataclass
class RideFrame:
    step: int
    percent: int
    distance_km: float
    elapsed_min: float
    bar: str


def next_hours(
    periods: Sequence[ForecastPeriod], n: int, now: Optional[datetime] = None
) -> List[ForecastPeriod]:
    """Periods from the one under way at ``now`` onwards, at most ``n`` of them.

    Each period runs until the next one starts (hourly for Open-Meteo,
    three-hourly for OpenWeather). ``now`` must be timezone-aware; it defaults
    to the current UTC time.
    """
    if n <= 0:
        return []
    now = now or datetime.now(timezone.utc)
    length = _period_length(periods)
    return [p for p in periods if p.time + length > now][:n]


def _period_length(periods: Sequence[ForecastPeriod]) -> timedelta:
    if len(periods) >= 2 and periods[1].time > periods[0].time:
        return periods[1].time - periods[0].time
    return timedelta(hours=1)


def nearest_period(periods: Sequence[ForecastPeriod], when: datetime) -> Optional[ForecastPeriod]:
    if not periods:
        return None
    return min(periods, key=lambda p: abs(p.time - when))


def ride_timeline(
    route: Route,
    periods: Sequence[ForecastPeriod],
    departure: datetime,
    checkpoints: int = 4,
) -> List[Checkpoint]:
    """Evenly spaced points along the route with the forecast expected at each."""
    if checkpoints < 2:
        raise ValueError("checkpoints must be at least 2")

    points = []
    for i in range(checkpoints):
        fraction = i / (checkpoints - 1)
        eta = departure + timedelta(minutes=route.duration_min * fraction)
        if i == 0:
            label = route.start.name
        elif i == checkpoints - 1:
            label = route.destination.name
        else:
            label = f"{round(fraction * 100)}% of the way"
        points.append(
            Checkpoint(
                label=label,
                percent=round(fraction * 100),
                distance_km=route.distance_km * fraction,
                eta=eta,
                period=nearest_period(periods, eta),
            )
        )
    return points


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = round(fraction * width)
    return "█" * filled + "░" * (width - filled)


def simulate_ride(route: Route, steps: int = 20) -> Iterator[RideFrame]:
    """Frames of a simulated ride from start (step 0) to arrival (step ``steps``)."""
    if steps <= 0:
        raise ValueError("steps must be positive")
    for step in range(steps + 1):
        fraction = step / steps
        yield RideFrame(
            step=step,
            percent=round(fraction * 100),
            distance_km=route.distance_km * fraction,
            elapsed_min=route.duration_min * fraction,
            bar=progress_bar(fraction),
        )
