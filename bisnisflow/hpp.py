"""
hpp.py — Cost-price (HPP) calculator with pricing and ad-budget targets.

Costs are grouped into free-form sections (raw material, packaging, ...).
The whole batch cost divided by batch size gives HPP per unit; the selling
price adds the desired margin on top of HPP.
"""

import math
from dataclasses import dataclass, field

from bisnisflow.data_state import new_id
from bisnisflow.marketplace import to_number
from bisnisflow.models import Product


@dataclass
class CostComponent:
    name: str = ""
    cost: float = 0.0


@dataclass
class CostSection:
    title: str
    items: list[CostComponent] = field(default_factory=list)

    @property
    def total(self):
        return sum(to_number(i.cost, strip=False) for i in self.items)


def default_sections():
    return [
        CostSection("Bahan Baku (Raw Material)", [CostComponent()]),
        CostSection("Packaging & Kemasan", [CostComponent()]),
    ]


@dataclass
class HPPCalculation:
    sections: list[CostSection] = field(default_factory=default_sections)
    batch_size: int = 1
    desired_margin: float = 30.0           # % on top of HPP
    marketplace_fee_percent: float = 0.0
    target_revenue: float = 10_000_000.0   # monthly
    target_roas: float = 5.0

    @property
    def total_production_cost(self):
        return sum(s.total for s in self.sections)

    @property
    def hpp_per_unit(self):
        return self.total_production_cost / self.batch_size if self.batch_size > 0 else 0.0

    @property
    def suggested_price(self):
        return self.hpp_per_unit * (1 + self.desired_margin / 100)

    @property
    def admin_fee(self):
        return self.suggested_price * (self.marketplace_fee_percent / 100)

    @property
    def net_profit_per_unit(self):
        return self.suggested_price - self.hpp_per_unit - self.admin_fee

    @property
    def real_gross_margin(self):
        """Share of the price left for ads and profit after HPP and admin fee."""
        price = self.suggested_price
        return self.net_profit_per_unit / price if price > 0 else 0.0

    @property
    def break_even_roas(self):
        m = self.real_gross_margin
        return 1 / m if m > 0 else 0.0

    @property
    def target_sales_qty(self):
        price = self.suggested_price
        return math.ceil(self.target_revenue / price) if price > 0 else 0

    @property
    def max_ad_spend(self):
        return self.target_revenue / self.target_roas if self.target_roas > 0 else 0.0

    @property
    def projected_monthly_net_profit(self):
        return self.target_sales_qty * self.net_profit_per_unit - self.max_ad_spend

    def to_product(self, name, category="General", min_stock=10):
        """Catalog entry for the calculated item, starting with zero stock."""
        name = (name or "").strip()
        if not name:
            raise ValueError("Product name is required")
        return Product(
            id=new_id(),
            name=name,
            category=(category or "").strip() or "General",
            hpp=self.hpp_per_unit,
            price=self.suggested_price,
            stock=0,
            min_stock=min_stock,
        )
