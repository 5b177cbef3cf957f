from conftest import make_current, make_periods, make_route
from weather_rider.rendering.advisory import advisories, gear_for, gear_suggestions, packing_list


def texts(items):
    return [a.text for a in items]


def test_gear_bands():
    assert "Balaclava" in gear_suggestions(-5)
    assert "Thermal gloves" in gear_suggestions(3)
    assert "Windproof jacket" in gear_suggestions(8)
    assert "Light jacket or fleece" in gear_suggestions(12)
    assert "Light layers" in gear_suggestions(18)
    assert "Short sleeves" in gear_suggestions(25)
    assert "Sun protection" in gear_suggestions(30)


def test_gear_add_ons():
    calm = gear_suggestions(18, wind_kmh=10, rain_probability=10)
    stormy = gear_suggestions(18, wind_kmh=45, rain_probability=60)
    assert "Waterproof rain shell" not in calm
    assert "Wind-resistant outer layer" in stormy
    assert "Waterproof rain shell" in stormy


def test_rain_threshold_is_strictly_above_thirty_percent():
    current = make_current()
    at_threshold = advisories(current, make_periods(rain=30))
    above = advisories(current, make_periods(rain=31))
    assert not any("Wet surface" in t for t in texts(at_threshold))
    assert any(t.startswith("Wet surface warning: up to 31%") for t in texts(above))


def test_wet_current_conditions_warn_without_forecast():
    current = make_current(code=63)
    current.description = "Rain"
    assert texts(advisories(current, [])) == ["Wet surface warning: rain right now."]


def test_wind_ice_and_heat():
    windy = advisories(make_current(wind_speed_ms=12), make_periods(rain=0))
    assert any("Strong wind (43 km/h)" in t for t in texts(windy))

    cold = advisories(make_current(temperature_c=1), [])
    assert any("ice" in t for t in texts(cold))

    hot = advisories(make_current(temperature_c=35), [])
    assert any("heat" in t.lower() for t in texts(hot))


def test_good_conditions():
    result = advisories(make_current(temperature_c=18), make_periods(count=3, temperature_c=18, rain=0))
    assert [(a.level, a.text) for a in result] == [("info", "Good riding conditions.")]


def test_gear_for_uses_current_reading():
    gear = gear_for(make_current(temperature_c=-2), make_periods(rain=80))
    assert "Insulated jacket" in gear
    assert "Waterproof overshoes" in gear


def test_packing_list_basics():
    items = packing_list(make_current(temperature_c=15), make_periods(count=2, temperature_c=15, rain=0))
    assert items[:2] == ["Phone and charger", "ID and documents"]
    assert "Rain jacket" not in items


def test_packing_list_weather_and_route():
    current = make_current(temperature_c=28, code=0)
    items = packing_list(current, make_periods(count=2, temperature_c=28, rain=50), make_route(duration_min=150))
    for expected in ("Rain jacket", "Sunscreen", "Extra water", "Snacks", "Lights"):
        assert expected in items
    assert "Gloves" not in items


def test_packing_list_short_ride_and_cold():
    items = packing_list(make_current(temperature_c=4), [], make_route(duration_min=30))
    assert "Gloves" in items
    assert "Snacks" not in items
    assert "Lights" not in items
