"""Fund menu offered for each risk tolerance."""
from __future__ import annotations

from typing import Any

RISK_TOLERANCES = ("low", "moderate", "high")

FUNDS_BY_RISK: dict[str, list[dict[str, Any]]] = {
    "low": [
        {"id": 1, "name": "Conservative Bond Fund", "description": "Low risk, stable returns."},
        {"id": 2, "name": "Money Market Fund", "description": "Very low risk, low returns."},
    ],
    "moderate": [
        {"id": 3, "name": "Balanced Growth Fund", "description": "Mix of stocks and bonds, moderate risk."},
        {"id": 4, "name": "Real Estate Fund", "description": "Invests in properties, moderate risk."},
    ],
    "high": [
        {"id": 5, "name": "Aggressive Equity Fund", "description": "High growth potential, high risk."},
        {"id": 6, "name": "Emerging Markets Fund", "description": "Invests in developing economies, high risk."},
    ],
}


def funds_for_risk(risk_tolerance: str | None) -> list[dict[str, Any]]:
    """Funds for one risk tolerance, or the whole catalog when none is given."""
    if risk_tolerance is None:
        return [{**f, "riskTolerance": risk} for risk in RISK_TOLERANCES for f in FUNDS_BY_RISK[risk]]
    return [{**f, "riskTolerance": risk_tolerance} for f in FUNDS_BY_RISK.get(risk_tolerance, [])]
