import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from lifeline.declutter.points import TimelinePoint  # noqa: E402


@pytest.fixture
def make_points():
    """Build TimelinePoints from (time, value, label) tuples."""

    def _make(rows):
        return [TimelinePoint(float(t), float(v), label) for t, v, label in rows]

    return _make


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temp file and return its path."""

    def _write(text, name="points.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
