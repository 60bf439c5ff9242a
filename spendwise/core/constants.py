"""Global constants for the spendwise application."""

# Database-related constants
FIRESTORE_BATCH_LIMIT = 400

# Collection names
USERS_COLLECTION = "users"
USERNAMES_COLLECTION = "usernames"
FRIENDSHIPS_COLLECTION = "friendships"
CIRCLES_COLLECTION = "circles"
TRANSACTIONS_COLLECTION = "transactions"
RECURRING_EXPENSES_COLLECTION = "recurringExpenses"
NOTIFICATIONS_COLLECTION = "notifications"
FRIEND_REQUESTS_COLLECTION = "friendRequests"
SETTLEMENTS_COLLECTION = "settlements"
ACCOUNT_DELETIONS_COLLECTION = "accountDeletions"

# Username rules
USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,15}$"
USERNAME_FORMAT_MESSAGE = (
    "Username must be 3-15 characters long and can only contain letters, "
    "numbers, and underscores."
)

# Search
EMAIL_SEARCH_LIMIT = 10

# Account defaults
DEFAULT_PRIMARY_COLOR = "181 95% 45%"
DEFAULT_CATEGORIES = [
    {"name": "Food", "color": "hsl(var(--chart-1))"},
    {"name": "Transport", "color": "hsl(var(--chart-2))"},
    {"name": "Shopping", "color": "hsl(var(--chart-3))"},
    {"name": "Bills", "color": "hsl(var(--chart-4))"},
    {"name": "Entertainment", "color": "hsl(var(--chart-5))"},
    {"name": "Health", "color": "hsl(var(--chart-6))"},
    {"name": "Other", "color": "hsl(var(--chart-7))"},
]

# Fields copied into friendship and circle member snapshots
SNAPSHOT_FIELDS = ("displayName", "photoURL")

# Dashboard
DEFAULT_MONTHLY_BUDGET = 50000
DAILY_SPENDING_DAYS = 10
RECENT_TRANSACTIONS_LIMIT = 4
CURRENCY_SYMBOL = "₹"
BUDGET_WARNING_PERCENT = 80
BUDGET_HALF_PERCENT = 50

# Profile pictures
PROFILE_PICTURES_PREFIX = "profile_pictures"
UPLOAD_FALLBACK_MESSAGE = "An unknown network error occurred during image upload."
