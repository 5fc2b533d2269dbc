"""Tests for the timeline grid builder."""

from datetime import date, datetime, timedelta, timezone

import pytest

from tripline.core.config import LayoutConfig
from tripline.models.location import Coordinates, Location
from tripline.models.step import Step
from tripline.models.timeline import DaylightWindow, Position
from tripline.services.daylight import calculate_daylight
from tripline.services.grid_builder import GridBuilder, build_layout, recompute


def utc_ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1000


@pytest.fixture
def builder() -> GridBuilder:
    return GridBuilder(LayoutConfig())


class TestEmptyLayout:
    """Layouts without placeable steps."""

    def test_no_steps(self, builder, paris):
        layout = builder.build([], {"paris": paris}, 60)
        assert layout.is_empty
        assert layout.tracks == {}
        assert layout.moves == []
        assert layout.day_width_px == 60

    def test_only_unknown_locations(self, builder, paris):
        steps = [Step.stay("s", "ghost", utc_ms(2024, 6, 1), utc_ms(2024, 6, 2))]
        layout = builder.build(steps, {"paris": paris}, 60)
        assert layout.is_empty

    def test_non_positive_day_width(self, builder, trip):
        layout = builder.build(trip.steps, trip.locations, 0)
        assert layout.day_width_px == 20


class TestTracks:
    """Track set and ordering."""

    def test_only_referenced_locations(self, builder, paris, tokyo):
        unused = Location("rome", "Rome", Coordinates(41.9, 12.5), 1)
        steps = [Step.stay("s", "tokyo", utc_ms(2024, 6, 1), utc_ms(2024, 6, 2))]
        layout = builder.build(steps, {"paris": paris, "tokyo": tokyo, "rome": unused}, 60)
        assert list(layout.tracks) == ["tokyo"]

    def test_first_reference_order(self, builder, paris, tokyo):
        """Tracks follow the first step referencing them, not input order."""
        steps = [
            Step.stay("later", "tokyo", utc_ms(2024, 6, 3), utc_ms(2024, 6, 4)),
            Step.move("first", "paris", "tokyo", utc_ms(2024, 6, 1, 14), utc_ms(2024, 6, 2, 1)),
        ]
        layout = builder.build(steps, {"tokyo": tokyo, "paris": paris}, 60)
        assert list(layout.tracks) == ["paris", "tokyo"]
        assert layout.tracks["paris"].track_top_px == 30
        assert layout.tracks["tokyo"].track_top_px == 100

    def test_unknown_reference_is_skipped(self, builder, paris, tokyo, flight):
        ghost = Step.move("ghost", "paris", "atlantis", utc_ms(2024, 6, 1, 1), utc_ms(2024, 6, 1, 2))
        layout = builder.build([ghost, flight], {"paris": paris, "tokyo": tokyo}, 60)
        assert set(layout.tracks) == {"paris", "tokyo"}
        assert [move.step_id for move in layout.moves] == ["flight"]

    def test_day_cells_contiguous(self, builder, trip):
        layout = builder.build(trip.steps, trip.locations, 60)
        for track in layout.tracks.values():
            days = [date.fromisoformat(cell.date) for cell in track.day_cells]
            assert days
            for previous, current in zip(days, days[1:]):
                assert current - previous == timedelta(days=1)

    def test_cells_share_scale(self, builder, trip):
        """Adjacent cells of a track are exactly one day width apart."""
        layout = builder.build(trip.steps, trip.locations, 90)
        cells = layout.tracks["tokyo"].day_cells
        for previous, current in zip(cells, cells[1:]):
            assert current.rect.left - previous.rect.left == pytest.approx(90)


class TestParisTokyo:
    """A single morning flight from Paris to Tokyo at 60px per day."""

    @pytest.fixture
    def layout(self, builder, trip):
        return builder.build(trip.steps, trip.locations, 60)

    def test_range(self, layout):
        assert layout.min_timestamp == utc_ms(2024, 5, 30, 23)
        assert layout.max_timestamp == utc_ms(2024, 6, 2, 15) - 1
        assert layout.days_in_range == 3

    def test_dimensions(self, layout):
        assert layout.total_width_px == pytest.approx(360)
        assert layout.total_height_px == pytest.approx(160)

    def test_track_dates(self, layout):
        for track in layout.tracks.values():
            assert [cell.date for cell in track.day_cells] == ["2024-05-31", "2024-06-01", "2024-06-02"]

    def test_cell_positions(self, layout):
        paris_cell = layout.tracks["paris"].day_cells[1]
        tokyo_cell = layout.tracks["tokyo"].day_cells[1]
        assert paris_cell.rect == Position(left=260, top=30, width=60, height=20)
        assert tokyo_cell.rect.left == pytest.approx(240)
        assert tokyo_cell.rect.top == 100

    def test_cell_flags(self, layout):
        paris_cells = {cell.date: cell for cell in layout.tracks["paris"].day_cells}
        tokyo_cells = {cell.date: cell for cell in layout.tracks["tokyo"].day_cells}

        assert paris_cells["2024-05-31"].is_empty
        assert paris_cells["2024-06-01"].has_move
        assert not paris_cells["2024-06-02"].has_move
        assert tokyo_cells["2024-06-02"].has_move
        assert not tokyo_cells["2024-05-31"].has_move
        assert not any(cell.has_stay for cell in paris_cells.values())

        assert not paris_cells["2024-05-31"].is_weekend
        assert paris_cells["2024-06-01"].is_weekend
        assert paris_cells["2024-06-02"].is_weekend

    def test_daylight(self, layout):
        cell = layout.tracks["paris"].day_cells[1]
        assert cell.daylight == calculate_daylight(48.85, 2.35, "2024-06-01", 1)
        assert "04:00" <= cell.daylight.sunrise_local <= "06:00"
        assert "20:00" <= cell.daylight.sunset_local <= "22:00"
        expected_left = cell.rect.left + 60 * cell.daylight.sunrise_minutes / 1440
        assert cell.daylight_rect.left == pytest.approx(expected_left)

    def test_move_rectangle(self, layout):
        assert len(layout.moves) == 1
        move = layout.moves[0]
        assert move.step_id == "flight"
        assert move.rect.left == pytest.approx(282.5)
        assert move.rect.width == pytest.approx(30)
        assert move.rect.top == 30
        assert move.rect.height == 90

    def test_move_labels(self, layout):
        move = layout.moves[0]
        assert move.begin_time_label.text == "09:00"
        assert move.begin_time_label.anchor == "left-center"
        assert move.begin_time_label.left == pytest.approx(282.5)
        assert move.end_time_label.text == "05:00"
        assert move.end_time_label.anchor == "right-center"
        assert move.end_time_label.left == pytest.approx(312.5)
        assert move.end_time_label.top == pytest.approx(75)
        assert move.duration_label.text == "12h"
        assert move.duration_label.anchor == "bottom-center"
        assert move.duration_label.left == pytest.approx(297.5)
        assert move.duration_label.top == pytest.approx(120)

    def test_labels_from_timestamps(self, builder, paris, tokyo):
        """Without ISO strings labels fall back to the local clock time."""
        move = Step.move("m", "paris", "tokyo", utc_ms(2024, 6, 1, 8), utc_ms(2024, 6, 1, 20))
        layout = builder.build([move], {"paris": paris, "tokyo": tokyo}, 60)
        assert layout.moves[0].begin_time_label.text == "09:00"
        assert layout.moves[0].end_time_label.text == "05:00"


class TestRecompute:
    """Recomputing after zoom changes."""

    def test_idempotent(self, trip):
        assert build_layout(trip.steps, trip.locations, 60) == build_layout(trip.steps, trip.locations, 60)

    def test_zoom_scales_horizontally(self, trip):
        narrow = recompute(trip.steps, trip.locations, 60)
        wide = recompute(trip.steps, trip.locations, 120)
        label = LayoutConfig().location_label_width
        assert wide.total_width_px - label == pytest.approx(2 * (narrow.total_width_px - label))
        assert wide.total_height_px == narrow.total_height_px
        assert wide.moves[0].rect.width == pytest.approx(2 * narrow.moves[0].rect.width)


class TestDaylightRect:
    """Tests for GridBuilder.daylight_rect."""

    RECT = Position(left=0, top=10, width=240, height=20)

    def test_regular(self):
        rect = GridBuilder.daylight_rect(self.RECT, DaylightWindow("06:00", "18:00"))
        assert rect == Position(left=60, top=10, width=120, height=20)

    def test_polar_night(self):
        assert GridBuilder.daylight_rect(self.RECT, DaylightWindow.polar_night()) is None

    def test_polar_day(self):
        assert GridBuilder.daylight_rect(self.RECT, DaylightWindow.polar_day()) == self.RECT

    def test_sunset_after_midnight_is_clipped(self):
        rect = GridBuilder.daylight_rect(self.RECT, DaylightWindow("20:00", "02:00"))
        assert rect.left == pytest.approx(200)
        assert rect.right == pytest.approx(240)


class TestStays:
    """Day cells covered by stays."""

    @pytest.fixture
    def honolulu(self) -> Location:
        return Location("honolulu", "Honolulu", Coordinates(21.31, -157.86), -10)

    def test_stay_over_several_days(self, builder, paris):
        stay = Step.stay("paris-stay", "paris", utc_ms(2024, 6, 1, 10), utc_ms(2024, 6, 2, 10))
        layout = builder.build([stay], {"paris": paris}, 60)
        cells = layout.tracks["paris"].day_cells

        assert [cell.date for cell in cells] == ["2024-06-01", "2024-06-02"]
        assert all(cell.has_stay for cell in cells)
        assert not any(cell.has_move for cell in cells)
        assert not any(cell.is_empty for cell in cells)
        assert layout.moves == []

    def test_stay_bucketed_by_own_calendar(self, builder, paris, honolulu):
        """A stay on June 1 UTC is an evening of May 31 in Honolulu."""
        steps = [
            Step.stay("paris-stay", "paris", utc_ms(2024, 6, 1, 10), utc_ms(2024, 6, 2, 10)),
            Step.stay("honolulu-stay", "honolulu", utc_ms(2024, 6, 1, 5), utc_ms(2024, 6, 1, 8)),
        ]
        layout = builder.build(steps, {"paris": paris, "honolulu": honolulu}, 60)
        assert list(layout.tracks) == ["honolulu", "paris"]

        honolulu_cells = {cell.date: cell for cell in layout.tracks["honolulu"].day_cells}
        paris_cells = {cell.date: cell for cell in layout.tracks["paris"].day_cells}

        assert list(honolulu_cells) == ["2024-05-31", "2024-06-01", "2024-06-02"]
        assert honolulu_cells["2024-05-31"].has_stay
        assert honolulu_cells["2024-06-01"].is_empty
        assert honolulu_cells["2024-06-02"].is_empty

        assert list(paris_cells) == ["2024-05-31", "2024-06-01", "2024-06-02"]
        assert paris_cells["2024-05-31"].is_empty
        assert paris_cells["2024-06-01"].has_stay
        assert paris_cells["2024-06-02"].has_stay


class TestInvalidCoordinates:
    """Coordinates that bypassed parsing must not break the build."""

    def test_nan_location(self, builder):
        broken = Location("void", "Void", Coordinates(float("nan"), float("nan")), 0)
        stay = Step.stay("s", "void", utc_ms(2024, 6, 1), utc_ms(2024, 6, 2))
        layout = builder.build([stay], {"void": broken}, 60)
        cells = layout.tracks["void"].day_cells
        assert cells
        assert all(cell.daylight.sunrise_local != "--:--" for cell in cells)
