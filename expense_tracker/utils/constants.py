APP_NAME = "Expense Tracker"
APP_WIDTH = 1100
APP_HEIGHT = 720

DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d %b %Y"   # e.g. '26 Dec 2025'

TYPE_INCOME = "income"
TYPE_EXPENSE = "expense"
TRANSACTION_TYPES = [TYPE_INCOME, TYPE_EXPENSE]

COLLECTION_NAME = "transactions"
EXPORT_FILENAME = "expense-tracker.csv"
CSV_HEADER = ["Date", "Description", "Category", "Type", "Amount"]

MIN_DESCRIPTION_LENGTH = 3

DEFAULT_CATEGORIES = [
    "Food",
    "Transport",
    "Shopping",
    "Bills",
    "Entertainment",
    "Healthcare",
    "Education",
    "Salary",
    "Freelance",
    "Investment",
    "Other",
]

# Pie slice colors, assigned by first appearance of a category
CHART_COLORS = [
    "#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0",
    "#9966FF", "#FF9F40", "#FF6384", "#C9CBCF",
]

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"

SEVERITY_COLORS = {
    "error":   "#F44336",
    "success": "#4CAF50",
    "info":    "#2196F3",
}
