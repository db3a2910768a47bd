"""Flask application configuration.

This module provides environment-based configuration for the Flask application.
Configuration is loaded from environment variables with sensible defaults.

Environment Variables:
    FLASK_ENV: Application environment (development, production, testing)
    FLASK_DEBUG: Enable Flask debug mode (0 or 1)
    HOST: Server host address (default: 0.0.0.0)
    PORT: Server port (default: 8080)
    LOG_LEVEL: Root log level (default: INFO)
    METRICS_ENABLED: Register OS metrics at startup (default: 1)
    METRICS_REPORTING_INTERVAL_SECONDS: Reporting interval (default: 30)
    METRICS_DIMENSIONS: Tags attached to every metric, e.g. "env=prod,region=eu"
    METRICS_LOG_REPORTER_ENABLED: Log every metric on its interval (default: 0)
"""

import os


def parse_dimensions(raw):
    """Parse ``key=value,key=value`` into a dict, skipping malformed pairs."""
    dimensions = {}
    for pair in (raw or '').split(','):
        key, sep, value = pair.partition('=')
        key = key.strip()
        if not sep or not key:
            continue
        dimensions[key] = value.strip()
    return dimensions


def _flag(name, default):
    return os.environ.get(name, default).lower() not in ('0', 'false', 'no')


class Config:
    """Base configuration with defaults suitable for production."""

    # Flask core settings
    DEBUG = False
    TESTING = False

    # Server settings
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 8080))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Metrics settings
    METRICS_ENABLED = _flag('METRICS_ENABLED', '1')
    METRICS_REPORTING_INTERVAL_SECONDS = float(
        os.environ.get('METRICS_REPORTING_INTERVAL_SECONDS', 30)
    )
    METRICS_DIMENSIONS = parse_dimensions(os.environ.get('METRICS_DIMENSIONS'))
    METRICS_LOG_REPORTER_ENABLED = _flag('METRICS_LOG_REPORTER_ENABLED', '0')


class DevelopmentConfig(Config):
    """Development configuration with debug enabled and verbose logging."""

    DEBUG = True
    ENV = 'development'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()


class ProductionConfig(Config):
    """Production configuration - secure and optimized."""

    DEBUG = False
    ENV = 'production'


class TestingConfig(Config):
    """Testing configuration without background samplers."""

    TESTING = True
    DEBUG = False
    METRICS_ENABLED = False
    METRICS_LOG_REPORTER_ENABLED = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig  # Default to production for safety
}


def get_config():
    """Get the appropriate configuration based on environment.

    Returns:
        Config: Configuration class based on FLASK_ENV or FLASK_DEBUG

    Priority:
        1. FLASK_ENV environment variable
        2. FLASK_DEBUG environment variable (0/1)
        3. Default to production (safe default)
    """
    env = os.environ.get('FLASK_ENV', '').lower()
    if env in config:
        return config[env]

    debug = os.environ.get('FLASK_DEBUG', '0').lower()
    if debug in ('1', 'true', 'yes', 'on'):
        return config['development']

    return config['default']
