"""
Ticker -> sector -> volatility regime lookup.

Stands in for the external company-metadata service. Unknown tickers fall back to the
moderate-volatility regime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..config.schemas import RegimeConfig, RegimeParams


class Regime(str, Enum):
    HIGH_VOLATILITY = "high_volatility"
    MODERATE_VOLATILITY = "moderate_volatility"


BIOTECHNOLOGY = "Biotechnology"
TECHNOLOGY = "Technology"


@dataclass(frozen=True)
class Company:
    ticker: str
    name: str
    domain: str
    pipeline: str
    market_cap: str
    sector: str


COMPANIES: Dict[str, Company] = {
    c.ticker: c
    for c in [
        Company("VRTX", "Vertex Pharmaceuticals", "vrtx.com", "Cystic Fibrosis & Gene Editing", "$120B", BIOTECHNOLOGY),
        Company("BIIB", "Biogen Inc.", "biogen.com", "Neurological Diseases (Alzheimer's, MS)", "$33B", BIOTECHNOLOGY),
        Company("MRNA", "Moderna, Inc.", "modernatx.com", "mRNA Vaccines & Therapeutics", "$60B", BIOTECHNOLOGY),
        Company("CRSP", "CRISPR Therapeutics", "crisprtx.com", "Gene-based medicines for serious diseases", "$5B", BIOTECHNOLOGY),
        Company("AAPL", "Apple Inc.", "apple.com", "Consumer Electronics, Software & Services", "$3.2T", TECHNOLOGY),
        Company("MSFT", "Microsoft Corp.", "microsoft.com", "Cloud Computing, OS & Business Software", "$3.1T", TECHNOLOGY),
        Company("GOOGL", "Alphabet Inc.", "abc.xyz", "Search, Cloud & Autonomous Driving", "$2.2T", TECHNOLOGY),
        Company("AMZN", "Amazon.com, Inc.", "amazon.com", "E-commerce, Cloud & AI", "$1.9T", TECHNOLOGY),
        Company("NVDA", "NVIDIA Corp.", "nvidia.com", "GPUs, AI Accelerators & Data Centers", "$2.8T", TECHNOLOGY),
        Company("TSLA", "Tesla, Inc.", "tesla.com", "Electric Vehicles, Energy & AI", "$580B", TECHNOLOGY),
        Company("META", "Meta Platforms, Inc.", "meta.com", "Social Media, VR/AR & AI", "$1.2T", TECHNOLOGY),
        Company("AMD", "Advanced Micro Devices", "amd.com", "CPUs, GPUs & Server Processors", "$260B", TECHNOLOGY),
        Company("NFLX", "Netflix, Inc.", "netflix.com", "Streaming Media & Content Production", "$265B", TECHNOLOGY),
        Company("CRM", "Salesforce, Inc.", "salesforce.com", "Cloud-based CRM & Enterprise Software", "$230B", TECHNOLOGY),
        Company("INTC", "Intel Corporation", "intel.com", "Semiconductors & Data Center Solutions", "$130B", TECHNOLOGY),
        Company("ORCL", "Oracle Corporation", "oracle.com", "Database Software, Cloud & ERP", "$340B", TECHNOLOGY),
    ]
}


def get_company(ticker: str) -> Optional[Company]:
    return COMPANIES.get(str(ticker).strip().upper())


def classify(ticker: str) -> Regime:
    """Map a ticker to its volatility regime (moderate when unknown)."""
    company = get_company(ticker)
    if company is not None and company.sector == BIOTECHNOLOGY:
        return Regime.HIGH_VOLATILITY
    return Regime.MODERATE_VOLATILITY


def regime_params(regime: Regime, regimes: RegimeConfig) -> RegimeParams:
    if regime is Regime.HIGH_VOLATILITY:
        return regimes.high_volatility
    return regimes.moderate_volatility
