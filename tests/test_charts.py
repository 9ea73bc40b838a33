from apps.revenue.charts import chart_geometry, render_line_chart

SERIES = [
    {"date": "2025-01-01", "amount": 0},
    {"date": "2025-01-02", "amount": 50.0},
    {"date": "2025-01-03", "amount": 0},
]


def test_geometry_scales():
    geo = chart_geometry(SERIES, width=800, height=300)
    assert geo.x_scale == 360
    assert geo.y_scale == 4.4
    assert geo.path == "M 40 260 L 400 40 L 760 260"
    assert geo.points[1]["title"] == "2025-01-02: $50.00"
    assert [t["label"] for t in geo.y_ticks] == ["$0", "$12", "$25", "$38", "$50"]
    assert [label["label"] for label in geo.x_labels] == ["Jan 1", "Jan 2", "Jan 3"]


def test_geometry_single_point_and_flat_series():
    geo = chart_geometry([{"date": "2025-01-01", "amount": 10}])
    assert geo.x_scale == 0
    assert geo.path == "M 40 260"


def test_geometry_thins_x_labels():
    series = [{"date": f"2025-01-{d:02d}", "amount": d} for d in range(1, 31)]
    geo = chart_geometry(series)
    assert len(geo.points) == 30
    # every ceil(30 / 8) = 4th point
    assert len(geo.x_labels) == 8
    assert geo.x_labels[1]["label"] == "Jan 5"


def test_render_line_chart():
    svg = render_line_chart(SERIES)
    assert svg.startswith("<svg")
    assert svg.count("<circle") == 3
    assert 'd="M 40 260 L 400 40 L 760 260"' in svg
    assert "<title>2025-01-02: $50.00</title>" in svg


def test_render_empty_chart():
    svg = render_line_chart([])
    assert "No data available" in svg
    assert "<circle" not in svg
