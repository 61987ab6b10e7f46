"""
Tests for configuration loading and validation.
"""

import pendulum
import pytest

from agendagrid.config import AppConfig, TimelineConfig
from agendagrid.domain.models import Granularity, TimelineBounds


class TestTimelineConfig:
    """Tests for TimelineConfig."""

    def test_defaults(self):
        """Test the 08:00-20:00 default window."""
        bounds = TimelineConfig().to_bounds()

        assert bounds == TimelineBounds(start_hour=8, end_hour=20, minimum_visual_height=15)
        assert bounds.window_minutes == 720

    def test_end_before_start(self):
        with pytest.raises(ValueError, match="end_hour must be later than start_hour"):
            TimelineConfig(start_hour=18, end_hour=9)

    def test_invalid_hour(self):
        with pytest.raises(ValueError):
            TimelineConfig(start_hour=25)

    def test_midnight_end(self):
        """Test that 24 is accepted as the end of the day."""
        assert TimelineConfig(start_hour=0, end_hour=24).to_bounds().window_minutes == 1440

    def test_non_positive_scale(self):
        with pytest.raises(ValueError):
            TimelineConfig(pixels_per_hour=0)


class TestTimelineBounds:
    """Tests for the domain bounds invariant."""

    def test_invalid_bounds(self):
        with pytest.raises(ValueError, match="Start hour 10 must be before end hour 9"):
            TimelineBounds(start_hour=10, end_hour=9)

    def test_minimum_height_must_fit(self):
        with pytest.raises(ValueError):
            TimelineBounds(start_hour=8, end_hour=9, minimum_visual_height=90)


class TestAppConfig:
    """Tests for loading AppConfig from YAML."""

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "timeline:\n"
            "  start_hour: 7\n"
            "  end_hour: 19\n"
            "locale: de\n"
            "week_start: 6\n"
            "default_view: month\n"
            "navigation:\n"
            "  min_date: 2024-01-01\n"
            "source:\n"
            "  kind: json\n"
            "  path: data/appointments.json\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.timeline.start_hour == 7
        assert config.locale == "de"
        assert config.week_start == 6
        assert config.default_view == Granularity.MONTH
        assert config.navigation.to_limits().min_date == pendulum.date(2024, 1, 1)
        assert config.navigation.to_limits().max_date is None
        assert config.source.path == tmp_path / "data" / "appointments.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("timeline: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(config_path)

    def test_http_source_requires_base_url(self):
        with pytest.raises(ValueError, match="base_url is required"):
            AppConfig(source={"kind": "http"})

    def test_invalid_week_start(self):
        with pytest.raises(ValueError):
            AppConfig(week_start=7)

    def test_inverted_navigation_limits(self):
        with pytest.raises(ValueError):
            AppConfig(navigation={"min_date": "2025-01-01", "max_date": "2024-01-01"})
