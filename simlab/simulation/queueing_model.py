"""
Analytic M/M/1 measures of performance.

Closed-form steady-state results used to cross-check the simulated
single-server queue:

    Ls = λ / (μ - λ)          Lq = λ² / (μ(μ - λ))
    Ws = 1 / (μ - λ)          Wq = λ / (μ(μ - λ))
    R  = λ / μ  (utilization) P0 = 1 - R
    Pn = Rⁿ (1 - R)
"""
from typing import Optional
import math

from ..domain.models import QueueMeasures
from ..errors import InvalidParameter, NumericDomainError


def mm1_measures(arrival_rate: float, service_rate: float, n: Optional[int] = None) -> QueueMeasures:
    """
    Compute M/M/1 steady-state measures.

    Args:
        arrival_rate: λ (>= 0)
        service_rate: μ (> 0)
        n: Optional number of customers for Pn (>= 0)

    Returns:
        QueueMeasures (utilization and idle as percentages)

    Raises:
        InvalidParameter: non-finite rates, μ <= 0, λ < 0 or n < 0
        NumericDomainError: λ >= μ, the queue has no steady state
    """
    if not (math.isfinite(arrival_rate) and math.isfinite(service_rate)):
        raise InvalidParameter("Arrival and service rates must be finite numbers")
    if service_rate <= 0:
        raise InvalidParameter(f"Service rate must be > 0, got {service_rate}")
    if arrival_rate < 0:
        raise InvalidParameter(f"Arrival rate cannot be negative, got {arrival_rate}")
    if n is not None and n < 0:
        raise InvalidParameter(f"n cannot be negative, got {n}")
    if arrival_rate >= service_rate:
        raise NumericDomainError(
            f"Lambda ({arrival_rate}) must be less than mu ({service_rate}) for a stable system"
        )

    lam, mu = arrival_rate, service_rate
    rho = lam / mu

    return QueueMeasures(
        arrival_rate=lam,
        service_rate=mu,
        ls=lam / (mu - lam),
        lq=(lam * lam) / (mu * (mu - lam)),
        ws=1 / (mu - lam),
        wq=lam / (mu * (mu - lam)),
        utilization_percent=rho * 100,
        idle_percent=100 - rho * 100,
        pn=rho ** n * (1 - rho) if n is not None else None,
        n=n,
    )
