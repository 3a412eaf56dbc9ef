"""
Theme constants — colors, chart layout, option lists.
Import from here instead of hardcoding colors anywhere.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
BG = "#0a0a14"
CARD = "#141828"
CARD2 = "#1a1a2e"
GREEN = "#2ecc71"
RED = "#e74c3c"
BLUE = "#3498db"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
TEAL = "#1abc9c"
WHITE = "#ffffff"
GRAY = "#aaaaaa"
DARKGRAY = "#666666"
CYAN = "#00d4ff"

# Retail pages lean green, online pages lean blue
MODE_COLORS = {"Retail": GREEN, "Online": BLUE}

STATUS_COLORS = {
    "Pending": ORANGE,
    "Packing": ORANGE,
    "Sent": BLUE,
    "Completed": GREEN,
    "Cancelled": RED,
}

EXPENSE_COLORS = {
    "Operational": ORANGE,
    "Marketing": PURPLE,
    "Salary": BLUE,
    "Rent": TEAL,
    "Other": DARKGRAY,
}

# ── Option lists ─────────────────────────────────────────────────────────────
MARKETPLACE_OPTIONS = ["Shopee", "TikTok", "Tokopedia", "Lazada"]
EXPENSE_CATEGORY_OPTIONS = ["Operational", "Marketing", "Salary", "Rent", "Other"]
DATE_PRESETS = [
    ("today", "Today"),
    ("yesterday", "Yesterday"),
    ("this_month", "This Month"),
    ("this_year", "This Year"),
    ("all", "All"),
]

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": WHITE},
    margin=dict(t=50, b=30, l=60, r=20),
)

# ── Sidebar Dimensions ───────────────────────────────────────────────────────
SIDEBAR_WIDTH = "250px"
CONTENT_MARGIN = "266px"  # sidebar + gap

TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
