"""
Pricing layer: closed-form option valuation.
"""

from .black_scholes import norm_cdf, price_option, intrinsic_value

__all__ = ["norm_cdf", "price_option", "intrinsic_value"]
