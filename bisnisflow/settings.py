"""
settings.py — Environment-driven configuration.
Values come from the process environment after a project-root .env is loaded.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# BASE_DIR points to the project root (parent of bisnisflow/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(BASE_DIR, ".env"))


def _env_float(name, default):
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_int(name, default):
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class ImportPolicy:
    """Estimation constants applied to imported marketplace orders.

    Imported rows carry no catalog cost data, so cost and fees are estimated:
    cost-price is a fraction of the unit price, the platform fee a fraction
    of revenue, and each order carries one fixed packing cost.
    """
    cost_ratio: float = 0.6
    platform_fee_rate: float = 0.08
    packing_cost: float = 2000.0


@dataclass(frozen=True)
class Settings:
    anthropic_api_key: str = ""
    advisor_model: str = "claude-sonnet-4-20250514"
    advisor_max_tokens: int = 1024
    port: int = 8070
    import_policy: ImportPolicy = ImportPolicy()
    default_packing_cost: float = 2000.0
    default_min_stock: int = 10

    @property
    def advisor_configured(self):
        return bool(self.anthropic_api_key)


def load_settings():
    """Build Settings from the current environment."""
    return Settings(
        anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", "").strip(),
        advisor_model=os.environ.get("ADVISOR_MODEL", "") or Settings.advisor_model,
        advisor_max_tokens=_env_int("ADVISOR_MAX_TOKENS", Settings.advisor_max_tokens),
        port=_env_int("PORT", Settings.port),
        import_policy=ImportPolicy(
            cost_ratio=_env_float("IMPORT_COST_RATIO", ImportPolicy.cost_ratio),
            platform_fee_rate=_env_float("IMPORT_PLATFORM_FEE_RATE", ImportPolicy.platform_fee_rate),
            packing_cost=_env_float("IMPORT_PACKING_COST", ImportPolicy.packing_cost),
        ),
        default_packing_cost=_env_float("DEFAULT_PACKING_COST", Settings.default_packing_cost),
        default_min_stock=_env_int("DEFAULT_MIN_STOCK", Settings.default_min_stock),
    )


SETTINGS = load_settings()
