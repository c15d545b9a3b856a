"""Centralized policy constants for stockfolio.

Named constants for policy-encoding literals used by the quote client, the chart
builder and the scene layout. Keeping them here makes the policy easy to audit.
"""

from __future__ import annotations

# =============================================================================
# Quote Provider
# =============================================================================

# Per-request timeout (seconds) before a transport failure surfaces to the caller.
#
# Used by:
# - api/config.py: APIConfig.timeout default
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 15.0

# Number of calendar days to walk back when the exact date has no daily close.
#
# Used by:
# - api/client.py: QuoteClient.fetch_historical_close()
#
# Covers weekends and market holidays. Offsets 0..10 are tried, i.e. 11 candidates.
HISTORICAL_LOOKBACK_DAYS: int = 10

# Date format used by the provider's daily time series keys.
PROVIDER_DATE_FORMAT: str = "%Y-%m-%d"

# Daily bars are keyed by the exchange's local trading day (US equities).
PROVIDER_TIMEZONE: str = "America/New_York"

# =============================================================================
# Chart Series
# =============================================================================

# Delay (seconds) inserted after each successful historical fetch during a series build.
#
# Used by:
# - charts/builder.py: ChartSeriesBuilder
#
# Keeps a full series build under the provider's free-tier request rate.
CHART_REQUEST_DELAY_SECONDS: float = 0.2

# Half-width of the uniform noise band applied to synthetic chart points (+/- 2%).
SYNTHETIC_NOISE_AMPLITUDE: float = 0.02

# Floor for synthetic chart prices.
SYNTHETIC_MIN_PRICE: float = 0.01

# Interval (seconds) between automatic reloads of an intraday (1D) chart.
#
# Used by:
# - charts/state.py: ChartController.auto_refresh()
CHART_AUTO_REFRESH_SECONDS: float = 30.0

# Fraction of the price span added above and below a series when computing its display range.
CHART_RANGE_PADDING: float = 0.1

# =============================================================================
# Scene Layout
# =============================================================================

# Grid layout for the 3D portfolio bars.
#
# Used by:
# - scene/layout.py: layout_bars()
SCENE_MAX_COLUMNS: int = 4
SCENE_BAR_SPACING: float = 0.15
SCENE_BAR_WIDTH: float = 0.08

# Bar height = weight * SCENE_HEIGHT_SCALE + SCENE_MIN_BAR_HEIGHT (scene units).
SCENE_HEIGHT_SCALE: float = 0.5
SCENE_MIN_BAR_HEIGHT: float = 0.05

# Vertical gap between the top of a bar and its floating label.
SCENE_LABEL_OFFSET: float = 0.05

# Seconds before a tapped selection is dismissed automatically.
#
# Used by:
# - scene/selection.py: SelectionController
SELECTION_AUTO_DISMISS_SECONDS: float = 10.0
