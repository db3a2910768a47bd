"""Application entry point.

Serve the OS metrics API with environment-based configuration.

Environment Variables:
    FLASK_ENV: Set to 'production' for production mode, 'development' for dev mode
    HOST: Server host address (default: 0.0.0.0)
    PORT: Server port (default: 8080)
    LOG_LEVEL: Root log level (default: INFO, DEBUG in development)

Examples:
    # Production mode, tagging every metric
    METRICS_DIMENSIONS="env=prod,host=web-1" python run.py

    # Log every metric on its reporting interval
    METRICS_LOG_REPORTER_ENABLED=1 FLASK_ENV=development python run.py
"""

import logging

from hostmetrics import create_app

app = create_app()

if __name__ == "__main__":
    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = app.config.get('HOST', '0.0.0.0')
    port = app.config.get('PORT', 8080)
    debug = app.config.get('DEBUG', False)

    # The reloader would start a second set of sampler threads
    app.run(host=host, port=port, debug=debug, use_reloader=False)
