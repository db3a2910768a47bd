import atexit
import logging

from flask import Flask

from .metrics import LoggingReporter, MetricsRegistry, create_os_metrics

logger = logging.getLogger(__name__)


def create_app(config_overrides=None):
    """Creates and configures the Flask application.

    Args:
        config_overrides: Optional dictionary of config values to override.
                         Typically used for testing.

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Load configuration from config.py (environment-based)
    from config import get_config

    config_class = get_config()
    app.config.from_object(config_class)

    # Apply test-specific or instance-specific overrides
    if config_overrides:
        app.config.from_mapping(config_overrides)

    if app.config.get("ENV") == "development":
        log = logging.getLogger('werkzeug')
        log.setLevel(logging.ERROR)

    reporter = None
    if app.config.get("METRICS_LOG_REPORTER_ENABLED", False):
        reporter = LoggingReporter()

    app.metrics_registry = MetricsRegistry(
        reporter=reporter,
        default_interval_seconds=app.config.get("METRICS_REPORTING_INTERVAL_SECONDS", 30),
    )

    if app.config.get("METRICS_ENABLED", True):
        create_os_metrics(
            app.metrics_registry,
            app.config.get("METRICS_DIMENSIONS") or {},
            app.config.get("METRICS_REPORTING_INTERVAL_SECONDS"),
        )
        atexit.register(app.metrics_registry.shutdown)
    else:
        logger.info("Metrics disabled, OS metrics not registered")

    from .blueprints.monitoring import monitoring as monitoring_blueprint

    app.register_blueprint(monitoring_blueprint)

    return app
