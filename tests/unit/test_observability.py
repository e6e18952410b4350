"""Unit tests for tracing decorators and catalog metrics."""

import asyncio
import inspect
import logging
import os
from unittest.mock import MagicMock, patch

import pytest
from pythonjsonlogger import jsonlogger

from menu_catalog_service.observability import config, metrics
from menu_catalog_service.observability.decorators import traced


@pytest.mark.unit
class TestObservabilityConfig:
    """Test suite for provider and logging setup."""

    @patch.dict(
        os.environ,
        {"ENVIRONMENT": "test", "OTEL_SERVICE_NAME": "menu-test"},
        clear=True,
    )
    def test_test_environment_never_exports(self) -> None:
        """Test that exporters stay off in the test environment even when requested."""
        app = MagicMock()
        with (
            patch.object(config, "setup_tracing") as tracing,
            patch.object(config, "setup_metrics") as meter,
            patch.object(config.trace, "set_tracer_provider") as set_tracer,
            patch.object(config.metrics, "set_meter_provider") as set_meter,
            patch.object(config.FastAPIInstrumentor, "instrument_app") as instrument,
        ):
            config.setup_observability(app, enable_exporters=True)

        tracing.assert_not_called()
        meter.assert_not_called()
        set_tracer.assert_called_once()
        set_meter.assert_called_once()
        instrument.assert_called_once_with(app)

    @patch.dict(os.environ, {"OTEL_SERVICE_NAME": "menu-test"}, clear=True)
    def test_exporters_enabled_outside_tests(self) -> None:
        """Test that both exporters are wired with the service resource."""
        with (
            patch.object(config, "setup_tracing") as tracing,
            patch.object(config, "setup_metrics") as meter,
        ):
            config.setup_observability(enable_exporters=True)

        resource = tracing.call_args.args[0]
        assert resource.attributes["service.name"] == "menu-test"
        meter.assert_called_once_with(resource)

    @patch.dict(os.environ, {"LOG_LEVEL": "warning"}, clear=True)
    def test_configure_logging_installs_json_handler(self) -> None:
        """Test that the root logger gets one JSON handler at the env level."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            config.configure_logging("DEBUG")

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


@pytest.mark.unit
class TestTraced:
    """Test suite for the traced decorator."""

    def test_sync_function_returns_result(self) -> None:
        """Test that wrapped sync functions behave as before."""

        @traced("test.add")
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    def test_sync_function_reraises(self) -> None:
        """Test that exceptions pass through the span unchanged."""

        @traced()
        def fail() -> None:
            raise KeyError("missing")

        with pytest.raises(KeyError, match="missing"):
            fail()

    def test_async_function_returns_result(self) -> None:
        """Test that coroutines stay coroutines."""

        @traced("test.double")
        async def double(x: int) -> int:
            return x * 2

        assert inspect.iscoroutinefunction(double)
        assert asyncio.run(double(21)) == 42

    def test_span_marks_failure(self) -> None:
        """Test that failures are recorded on the span."""
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch("menu_catalog_service.observability.decorators.trace.get_tracer") as get_tracer:
            get_tracer.return_value = tracer

            @traced("test.fail")
            def fail() -> None:
                raise ValueError("boom")

            with pytest.raises(ValueError):
                fail()

        span.set_attribute.assert_any_call("success", False)
        span.set_attribute.assert_any_call("error.type", "ValueError")
        span.record_exception.assert_called_once()


@pytest.mark.unit
class TestCatalogMetrics:
    """Test suite for catalog metric helpers."""

    def test_create_counts_mutation_and_grows_catalog(self) -> None:
        """Test that a create bumps both the counter and the size gauge."""
        with (
            patch.object(metrics, "mutation_counter") as counter,
            patch.object(metrics, "catalog_size") as size,
        ):
            metrics.record_mutation("create")

        counter.add.assert_called_once_with(1, {"operation": "create"})
        size.add.assert_called_once_with(1)

    def test_delete_shrinks_catalog(self) -> None:
        """Test that a delete decrements the size gauge."""
        with (
            patch.object(metrics, "mutation_counter"),
            patch.object(metrics, "catalog_size") as size,
        ):
            metrics.record_mutation("delete")

        size.add.assert_called_once_with(-1)

    def test_update_leaves_size_alone(self) -> None:
        """Test that updates do not change the catalog size."""
        with (
            patch.object(metrics, "mutation_counter"),
            patch.object(metrics, "catalog_size") as size,
        ):
            metrics.record_mutation("update")

        size.add.assert_not_called()

    def test_record_rejection(self) -> None:
        """Test rejection attributes."""
        with patch.object(metrics, "rejection_counter") as counter:
            metrics.record_rejection("update", "not_found")

        counter.add.assert_called_once_with(1, {"operation": "update", "reason": "not_found"})
