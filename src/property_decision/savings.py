"""
Savings growth toward a target (typically the down payment).

Two strategies share one result model and one horizon:

SIMPLE
  Flat trajectory: add the contribution each month until the target is met.
  Returns trajectory: balance * (1 + annual_return/12/100) + contribution.
  Milestones at month 0, every 12 months and when either trajectory first
  reaches the target.

COMPOUNDING
  Real (inflation-adjusted) monthly return:
      nominal   = (1 + R)^(1/12) - 1
      inflation = (1 + I)^(1/12) - 1
      real      = (1 + nominal) / (1 + inflation) - 1
  balance = balance * (1 + real) + contribution, every month recorded.

Both loops stop at the horizon, so a zero or negative contribution simply
runs the projection out without reaching the target.
"""

import math
from typing import Optional

from property_decision.config import settings
from property_decision.errors import InvalidInputError, require_non_negative
from property_decision.models import (
    MonthlyBalance,
    MonthsToTarget,
    SavingsMilestone,
    SavingsProjection,
    SavingsStrategy,
    TargetReached,
)


def _resolve_horizon(horizon_months: Optional[int]) -> int:
    horizon = settings.savings_horizon_months if horizon_months is None else horizon_months
    if horizon <= 0:
        raise InvalidInputError("horizon_months", horizon, "must be positive")
    return horizon


def _require_finite(field: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInputError(field, value, "must be a finite number")
    return value


def project_simple(
    current: float,
    target: float,
    monthly_contribution: float,
    annual_return_pct: float,
    horizon_months: Optional[int] = None,
) -> SavingsProjection:
    """Flat contributions vs nominal compounding, with yearly milestones."""
    require_non_negative("current", current)
    require_non_negative("target", target)
    _require_finite("monthly_contribution", monthly_contribution)
    _require_finite("annual_return_pct", annual_return_pct)
    horizon = _resolve_horizon(horizon_months)

    monthly_return = annual_return_pct / 12 / 100

    standard = current
    with_returns = current
    months_standard = 0
    months_with_returns = 0
    milestones = [SavingsMilestone(month=0, standard_amount=current, with_returns=current)]

    for month in range(1, horizon + 1):
        standard_hit = with_returns_hit = False

        if standard < target:
            standard += monthly_contribution
            months_standard = month
            standard_hit = standard >= target

        if with_returns < target:
            with_returns = with_returns * (1 + monthly_return) + monthly_contribution
            months_with_returns = month
            with_returns_hit = with_returns >= target

        if month % 12 == 0 or standard_hit or with_returns_hit:
            milestones.append(
                SavingsMilestone(
                    month=month,
                    standard_amount=standard,
                    with_returns=with_returns,
                )
            )

        if standard >= target and with_returns >= target:
            break

    total_contributions = monthly_contribution * months_with_returns
    return SavingsProjection(
        strategy=SavingsStrategy.SIMPLE,
        current=current,
        target=target,
        monthly_contribution=monthly_contribution,
        annual_return=annual_return_pct,
        horizon_months=horizon,
        months_to_target=MonthsToTarget(
            standard=months_standard,
            with_returns=months_with_returns,
        ),
        target_reached=TargetReached(
            standard=standard >= target,
            with_returns=with_returns >= target,
        ),
        milestones=milestones,
        total_contributions=total_contributions,
        total_returns=with_returns - current - total_contributions,
    )


def real_monthly_return(expected_return_pct: float, inflation_pct: float) -> float:
    """Monthly return net of inflation, both inputs annual percentages."""
    for field, value in (
        ("expected_return_pct", expected_return_pct),
        ("inflation_pct", inflation_pct),
    ):
        if value <= -100:
            raise InvalidInputError(field, value, "must be above -100")
    nominal = (1 + expected_return_pct / 100) ** (1 / 12) - 1
    inflation = (1 + inflation_pct / 100) ** (1 / 12) - 1
    return (1 + nominal) / (1 + inflation) - 1


def _flat_months(current: float, target: float, contribution: float, horizon: int) -> int:
    """Months for flat contributions to close the gap, capped at the horizon."""
    remaining = target - current
    if remaining <= 0:
        return 0
    if contribution <= 0:
        return horizon
    return min(math.ceil(remaining / contribution), horizon)


def project_compounding(
    monthly_contribution: float,
    target: float,
    expected_return_pct: float,
    inflation_pct: Optional[float] = None,
    horizon_months: Optional[int] = None,
    current: float = 0.0,
) -> SavingsProjection:
    """Inflation-adjusted compounding with a full monthly breakdown."""
    require_non_negative("current", current)
    require_non_negative("target", target)
    _require_finite("monthly_contribution", monthly_contribution)
    _require_finite("expected_return_pct", expected_return_pct)
    if inflation_pct is None:
        inflation_pct = settings.default_inflation_pct
    _require_finite("inflation_pct", inflation_pct)
    horizon = _resolve_horizon(horizon_months)

    real_return = real_monthly_return(expected_return_pct, inflation_pct)

    balance = current
    month = 0
    breakdown: list[MonthlyBalance] = []
    milestones = [SavingsMilestone(month=0, standard_amount=current, with_returns=current)]

    while balance < target and month < horizon:
        returns = balance * real_return
        balance += monthly_contribution + returns
        month += 1
        breakdown.append(
            MonthlyBalance(
                month=month,
                balance=balance,
                contribution=monthly_contribution,
                returns=returns,
            )
        )
        if month % 12 == 0 or balance >= target:
            milestones.append(
                SavingsMilestone(
                    month=month,
                    standard_amount=current + monthly_contribution * month,
                    with_returns=balance,
                )
            )

    total_contributions = monthly_contribution * month
    standard_months = _flat_months(current, target, monthly_contribution, horizon)
    return SavingsProjection(
        strategy=SavingsStrategy.COMPOUNDING,
        current=current,
        target=target,
        monthly_contribution=monthly_contribution,
        annual_return=expected_return_pct,
        inflation_rate=inflation_pct,
        horizon_months=horizon,
        months_to_target=MonthsToTarget(standard=standard_months, with_returns=month),
        target_reached=TargetReached(
            standard=current + monthly_contribution * standard_months >= target,
            with_returns=balance >= target,
        ),
        milestones=milestones,
        monthly_breakdown=breakdown,
        total_contributions=total_contributions,
        total_returns=balance - current - total_contributions,
    )


def compute_savings_projection(
    current: float,
    target: float,
    monthly_contribution: float,
    annual_return_pct: float,
    strategy: SavingsStrategy = SavingsStrategy.SIMPLE,
    inflation_pct: Optional[float] = None,
    horizon_months: Optional[int] = None,
) -> SavingsProjection:
    """Dispatch to the requested projection strategy."""
    strategy = SavingsStrategy(strategy)
    if strategy is SavingsStrategy.COMPOUNDING:
        return project_compounding(
            monthly_contribution,
            target,
            annual_return_pct,
            inflation_pct=inflation_pct,
            horizon_months=horizon_months,
            current=current,
        )
    return project_simple(
        current,
        target,
        monthly_contribution,
        annual_return_pct,
        horizon_months=horizon_months,
    )
