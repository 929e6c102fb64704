"""HTTP entrypoint serving market history and triggering syncs (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

import requests
from flask import Flask, jsonify, request

from market_intel.core.config import ConfigError, get_settings
from market_intel.core.db import fetch_snapshots
from market_intel.core.targets import load_targets, parse_targets
from market_intel.etl.analytics import history_series, market_summary, review_share
from market_intel.etl.snapshot import NoVenueDataError
from market_intel.jobs.sync_market import run_sync_job
from market_intel.vendors.gemini import GeminiError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, never the database."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "worker_port_config": settings.worker_port,
                "market": settings.market_location,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/api/market")
def market() -> Any:
    """Latest snapshot venues, full history (oldest first) and benchmark analytics."""
    settings = get_settings()
    try:
        snapshots = fetch_snapshots(settings.history_limit)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Market history fetch failed: %s", exc)
        return jsonify({"error": "Database fetch failed."}), 500

    if snapshots:
        latest = snapshots[0]
        venues = list(latest.venues)
        last_updated = latest.timestamp.isoformat()
    else:
        venues = []
        last_updated = datetime.now(timezone.utc).isoformat()

    history = [snapshot.to_dict() for snapshot in reversed(snapshots)]
    return (
        jsonify(
            {
                "casinos": [venue.to_dict() for venue in venues],
                "lastUpdated": last_updated,
                "history": history,
                "analytics": {
                    "summary": market_summary(venues, settings.subject_marker),
                    "reviewShare": review_share(venues),
                    "trend": history_series(snapshots),
                },
            }
        ),
        200,
    )


@app.post("/api/sync")
def sync() -> Any:
    """
    Run a market sync and store the resulting snapshot.
    Optional JSON field: targets ([{name, placeId}]); defaults to configured targets.
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    settings = get_settings()

    raw_targets = payload.get("targets")
    try:
        if raw_targets is None:
            targets = load_targets(settings.targets_file)
        elif isinstance(raw_targets, list):
            targets = parse_targets(raw_targets)
        else:
            return jsonify({"error": "targets must be a list"}), 400
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    if not targets:
        return jsonify({"error": "No targets"}), 400

    try:
        snapshot = run_sync_job(targets=targets)
    except NoVenueDataError:
        return jsonify({"error": "No data parsed"}), 422
    except ConfigError as exc:
        logger.error("Sync misconfigured: %s", exc)
        return jsonify({"error": str(exc)}), 500
    except (GeminiError, requests.RequestException) as exc:
        logger.error("Upstream model request failed: %s", exc)
        return jsonify({"error": "model request failed"}), 502
    except Exception as exc:  # noqa: BLE001
        logger.exception("Sync failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return (
        jsonify({"success": True, "count": len(snapshot.venues), "timestamp": snapshot.timestamp.isoformat()}),
        200,
    )


def main() -> None:
    """Cloud Run injects PORT; fall back to WORKER_PORT locally."""
    env_port = os.getenv("PORT")
    logger.info("[BOOT] ENV PORT=%s", env_port)

    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)

    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
