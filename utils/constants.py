APP_NAME = "Equilibra"
APP_WIDTH = 1200
APP_HEIGHT = 760
DB_FILE = "equilibra.db"
DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

MIN_PASSWORD_LENGTH = 6
INITIAL_BALANCE_CATEGORY = "Initial balance"
UNCATEGORIZED = "Uncategorized"

THEME_MODES = ("light", "dark", "system")
REPORT_TIMEFRAMES = {"7d": 7, "30d": 30, "90d": 90}
RECENT_TRANSACTIONS_LIMIT = 5
CATEGORY_BREAKDOWN_LIMIT = 6

CATEGORY_ICONS = [
    ("restaurant",      "Food"),
    ("car",             "Transport"),
    ("cart",            "Shopping"),
    ("heart",           "Health"),
    ("school",          "Education"),
    ("home",            "Housing"),
    ("game-controller", "Leisure"),
    ("cash",            "Salary"),
    ("trending-up",     "Investments"),
    ("laptop",          "Freelance"),
    ("gift",            "Gift"),
    ("airplane",        "Travel"),
    ("paw",             "Pet"),
    ("fitness",         "Gym"),
    ("musical-notes",   "Entertainment"),
    ("logo-usd",        "Other"),
]

GOAL_ICONS = [
    ("airplane", "Travel"),
    ("car",      "Car"),
    ("home",     "House"),
    ("laptop",   "Electronics"),
    ("school",   "Education"),
    ("medkit",   "Emergency"),
    ("gift",     "Gift"),
    ("diamond",  "Luxury"),
    ("wallet",   "Reserve"),
    ("rocket",   "Project"),
    ("heart",    "Health"),
    ("trophy",   "Goal"),
]

PALETTE = [
    "#FF6B6B",
    "#FF9F43",
    "#FECA57",
    "#1DD1A1",
    "#54A0FF",
    "#5F27CD",
    "#FF6B9D",
    "#00D2D3",
    "#A259FF",
    "#31D158",
]

INSIGHT_COLORS = {
    "positive": "#31D158",
    "warning":  "#FF9800",
    "info":     "#54A0FF",
}

INSIGHT_ICONS = {
    "positive": "✔",
    "warning":  "⚠",
    "info":     "ℹ",
}

INCOME_COLOR = "#31D158"
EXPENSE_COLOR = "#FF4D4F"
ACCENT_COLOR = "#A259FF"
