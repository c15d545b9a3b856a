"""Valuation engine: pure functions over positions and portfolios.

Every function here is total over well-formed inputs and has no side effects.

Cost basis note:
    `average_cost` folds sells into both the accumulated cost (at the *sale* price)
    and the share count. This is not FIFO and not a buys-only weighted average;
    historical gain/loss figures depend on it, so it must not be "corrected" here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stockfolio.portfolio.models import Portfolio, Position


def total_shares(position: Position) -> int:
    """Signed sum of transaction share counts (buys positive, sells negative)."""
    return sum(t.shares for t in position.transactions)


def average_cost(position: Position) -> float:
    """Accumulated signed cost divided by held shares, or 0.0 when no shares are held."""
    cost = sum(t.price_per_share * t.shares for t in position.transactions)
    shares = total_shares(position)
    return cost / shares if shares > 0 else 0.0


def current_value(position: Position) -> float:
    """Current price times held shares. Negative for oversold positions."""
    return position.current_price * total_shares(position)


def gain_loss_percent(position: Position) -> float:
    """Percent change of the current price against the average cost (0.0 without a basis)."""
    avg = average_cost(position)
    if avg <= 0:
        return 0.0
    return (position.current_price - avg) / avg * 100


def gain_loss_amount(position: Position) -> float:
    """Unrealized gain/loss in currency: (price - average cost) * shares."""
    avg = average_cost(position)
    if avg <= 0:
        return 0.0
    return (position.current_price - avg) * total_shares(position)


def portfolio_total_value(portfolio: Portfolio) -> float:
    """Sum of position values; 0.0 for an empty portfolio."""
    return sum((current_value(p) for p in portfolio.positions), 0.0)


def portfolio_composition(portfolio: Portfolio) -> dict[str, int]:
    """Held shares per symbol."""
    return {p.symbol: total_shares(p) for p in portfolio.positions}


def portfolio_value_distribution(portfolio: Portfolio) -> dict[str, float]:
    """Current value per symbol."""
    return {p.symbol: current_value(p) for p in portfolio.positions}


def portfolio_weight(position: Position, portfolio: Portfolio) -> float:
    """Fraction of the portfolio's total value held in `position` (0.0 if the total is <= 0)."""
    total = portfolio_total_value(portfolio)
    if total <= 0:
        return 0.0
    return current_value(position) / total
