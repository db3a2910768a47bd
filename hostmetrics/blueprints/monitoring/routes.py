from flask import current_app, jsonify

from . import monitoring


@monitoring.route("/api/metrics/summary")
def metrics_summary():
    """Return the latest reading of every registered metric."""
    if not current_app.config.get("METRICS_ENABLED", True):
        return jsonify({"enabled": False, "metrics": []})

    return jsonify(current_app.metrics_registry.get_snapshot())


@monitoring.route("/api/metrics/<path:name>")
def metric_detail(name):
    """Return the current reading of a single metric."""
    entry = current_app.metrics_registry.read(name)
    if entry is None:
        return jsonify({"error": f"Unknown metric: {name}"}), 404
    return jsonify(entry)
