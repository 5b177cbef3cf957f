import os
from datetime import datetime, timezone

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from weather_rider import (
    ApiKeyError,
    LocationNotFound,
    OSRMRouteService,
    WeatherProvider,
    WeatherRiderError,
    settings,
)
from weather_rider.config import FORECAST_PERIODS, NEXT_HOURS
from weather_rider.rendering import (
    advisories,
    gear_for,
    next_hours,
    packing_list,
    precipitation_chart,
    ride_timeline,
    simulate_ride,
    temperature_chart,
)
from weather_rider.services.openweather import icon_url
from weather_rider.utils import (
    describe_wmo,
    format_date,
    format_distance,
    format_duration,
    format_temp,
    format_wind,
    theme_for,
)
from weather_rider.utils.weather_codes import GRADIENTS

app = Flask(__name__)
# Needed for flashing messages and the remembered city
app.secret_key = settings.secret_key or os.urandom(24)

app.jinja_env.filters["temp"] = format_temp
app.jinja_env.filters["wind"] = format_wind
app.jinja_env.filters["distance"] = format_distance
app.jinja_env.filters["duration"] = format_duration


def _period_count(source: str) -> int:
    return NEXT_HOURS if source == "open-meteo" else FORECAST_PERIODS


def _form_coords(lat_text: str, lon_text: str):
    """``(lat, lon)`` from the optional form fields, or None when they don't parse."""
    try:
        lat, lon = float(lat_text), float(lon_text)
    except ValueError:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


def _current_card(report) -> dict:
    current = report.current
    theme = theme_for(current.source, current.condition_code)
    return {
        "location": current.location.label,
        "description": current.description,
        "emoji": describe_wmo(current.condition_code)[0] if current.source == "open-meteo" else "",
        "icon_url": icon_url(current.icon),
        "temperature_c": current.temperature_c,
        "feels_like_c": current.feels_like_c,
        "humidity": current.humidity,
        "wind_speed_ms": current.wind_speed_ms,
        "pressure_hpa": current.pressure_hpa,
        "theme": theme,
        "background": GRADIENTS[theme],
        "source": current.source,
    }


@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "POST":
        location = request.form.get("location", "").strip()
        destination = request.form.get("destination", "").strip()
        units = "imperial" if request.form.get("units") == "imperial" else "metric"
        lat_text = request.form.get("lat", "").strip()
        lon_text = request.form.get("lon", "").strip()

        coords = None
        if lat_text or lon_text:
            coords = _form_coords(lat_text, lon_text)
            if coords is None:
                flash("Latitude and longitude must be numbers, e.g. 51.5 and -0.12", "error")
                return redirect(url_for("index"))
        elif not location:
            flash("Please enter a city name", "error")
            return redirect(url_for("index"))

        try:
            provider = WeatherProvider()
            if coords:
                app.logger.info("Fetching weather for %s,%s...", *coords)
                report = provider.report_by_coords(*coords)
            else:
                app.logger.info("Fetching weather for %s...", location)
                report = provider.report(location)
            outlook = provider.outlook(report)

            route = None
            if destination:
                app.logger.info("Routing %s -> %s...", report.location.label, destination)
                route = OSRMRouteService().route(report.location, provider.locate(destination))
        except WeatherRiderError as exc:
            flash(str(exc), "error")
            return redirect(url_for("index"))

        # coordinate lookups are remembered only when they resolved to a named place
        if not coords:
            session["last_city"] = location
        elif report.location.country:
            session["last_city"] = report.location.name

        periods = next_hours(report.periods, _period_count(report.source))
        now = datetime.now(timezone.utc)

        return render_template(
            "result.html",
            units=units,
            updated=format_date(datetime.now()),
            card=_current_card(report),
            periods=periods,
            temperature_svg=temperature_chart(periods, units),
            precipitation_svg=precipitation_chart(periods),
            advisories=advisories(report.current, periods),
            gear=gear_for(report.current, periods),
            packing=packing_list(report.current, periods, route),
            outlook=outlook,
            route=route,
            timeline=ride_timeline(route, report.periods, now) if route else [],
            frames=list(simulate_ride(route)) if route else [],
        )

    # GET request – show the form, pre-filled with the last city searched
    return render_template("index.html", last_city=session.get("last_city", settings.default_city))


@app.route("/api/weather")
def api_weather():
    city = request.args.get("city", "").strip()
    if not city:
        return jsonify({"error": "Please enter a city name"}), 400

    try:
        report = WeatherProvider().report(city)
    except LocationNotFound as exc:
        return jsonify({"error": str(exc)}), 404
    except ApiKeyError as exc:
        return jsonify({"error": str(exc)}), 401
    except WeatherRiderError as exc:
        return jsonify({"error": str(exc)}), 502

    periods = next_hours(report.periods, _period_count(report.source))
    return jsonify(
        {
            "current": _current_card(report),
            "periods": [
                {
                    "time": p.time.isoformat(),
                    "temperature_c": p.temperature_c,
                    "feels_like_c": p.feels_like_c,
                    "description": p.description,
                    "precipitation_probability": p.precipitation_probability,
                    "wind_speed_ms": p.wind_speed_ms,
                }
                for p in periods
            ],
            "advisories": [a.text for a in advisories(report.current, periods)],
        }
    )


if __name__ == "__main__":
    # For development only – use a proper WSGI server in production
    app.run(debug=True, host="0.0.0.0", port=5000)
