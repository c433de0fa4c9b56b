"""
D4 Portfolio Module

Executive analytics across a portfolio of scored use cases.
"""

from .analytics import PortfolioSummary, ScoredUseCase, score_portfolio, summarize_portfolio

__all__ = ["PortfolioSummary", "ScoredUseCase", "score_portfolio", "summarize_portfolio"]
