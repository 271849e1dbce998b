"""Unit tests for logging utilities."""

import logging
from pathlib import Path
from unittest.mock import Mock

from symbolizer.domain import Diagnostic, DiagnosticKind, Variant
from symbolizer.utils.logging import RenderLogger, RenderStats, configure_logging


class TestRenderStats:
    """Tests for RenderStats class."""

    def test_duration(self) -> None:
        """Test duration is only known once both times are set."""
        stats = RenderStats()
        assert stats.duration_seconds == 0.0
        stats.start_time = 1.0
        stats.end_time = 3.5
        assert stats.duration_seconds == 2.5


class TestRenderLogger:
    """Tests for RenderLogger class."""

    def test_variant_and_fallback_counts(self) -> None:
        """Test statistics follow logged events."""
        logger = RenderLogger(Mock())
        logger.log_variant_complete(Variant.REGULAR, 3, 93.03)
        logger.log_fallback(Variant.BLACK, "not provided")
        logger.log_variant_complete(Variant.BLACK, 3, 93.03)

        assert logger.stats.variants_rendered == [Variant.REGULAR, Variant.BLACK]
        assert logger.stats.fallbacks == [Variant.BLACK]
        assert logger.stats.paths_emitted == 6

    def test_diagnostic_levels(self) -> None:
        """Test warnings and alignment messages use different levels."""
        inner = Mock()
        logger = RenderLogger(inner)
        logger.log_diagnostic(Diagnostic(DiagnosticKind.MASK_UNSUPPORTED, "mask", Variant.BLACK))
        logger.log_diagnostic(Diagnostic(DiagnosticKind.ALIGNMENT, "Alignment: --insets 0,0,0,0"))

        inner.warning.assert_called_once_with("mask", kind="MASK_UNSUPPORTED", variant="black")
        inner.info.assert_called_once_with("Alignment: --insets 0,0,0,0", kind="ALIGNMENT", variant=None)
        assert logger.stats.warning_count == 1


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_reconfigure_replaces_handlers(self, tmp_path: Path) -> None:
        """Test repeated configuration does not stack handlers."""
        configure_logging(log_file=tmp_path / "a.log")
        configure_logging(log_file=tmp_path / "b.log", quiet=True)

        ours = [h for h in logging.getLogger().handlers if h.get_name() == "symbolizer"]
        assert len(ours) == 2
        assert ours[0].level == logging.ERROR
        assert (tmp_path / "b.log").read_text(encoding="utf-8") != ""

        configure_logging()
