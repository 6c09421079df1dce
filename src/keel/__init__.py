"""Keel debt payoff engine package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestingConfig
from .services.payoff import DebtPayoffService

__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "DebtPayoffService"]
