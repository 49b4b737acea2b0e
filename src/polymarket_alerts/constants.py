"""Centralized policy constants for Polymarket Alerts.

Named constants for policy-encoding literals shared by the engine, the API clients
and the CLI.
"""

from __future__ import annotations

# =============================================================================
# Evaluation engine
# =============================================================================

# Minimum time between two polls of the same market.
#
# Keyed per market, not per condition: conditions watching the same market
# share this clock.
MIN_POLL_INTERVAL_SECONDS: float = 60.0

# Cadence of scheduled passes (`polyalerts alerts monitor`).
#
# Equivalent to a `*/5 * * * *` cron schedule.
DEFAULT_PASS_INTERVAL_SECONDS: int = 300

# Upper bound on a single market fetch inside a pass. A timeout counts as a
# fetch failure (transient skip).
DEFAULT_FETCH_TIMEOUT_SECONDS: float = 10.0

# Upper bound on a single webhook delivery inside a pass. A timeout counts as a
# notifier failure (retried on a later pass).
DEFAULT_NOTIFY_TIMEOUT_SECONDS: float = 10.0

# =============================================================================
# Notifications
# =============================================================================

# `type` tag of every webhook payload. Downstream consumers dispatch on it.
ALERT_PAYLOAD_TYPE: str = "prediction_market_alert"

# =============================================================================
# Market search
# =============================================================================

# Number of open markets fetched from Gamma per search before text filtering.
DEFAULT_SEARCH_LIMIT: int = 100

# Default HTTP timeout for Polymarket API clients.
DEFAULT_HTTP_TIMEOUT_SECONDS: float = 30.0
