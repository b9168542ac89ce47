"""Constants for Sponsor Guard."""

from pathlib import Path

# --- Config paths ---
CONFIG_DIR = Path.home() / ".sponsor-guard"
STORE_DB_PATH = CONFIG_DIR / "store.db"

# --- Remote analysis ---
ANALYSIS_ENDPOINT = "http://localhost:3000/api/verify"
ENDPOINT_ENV_VAR = "SPONSOR_GUARD_ENDPOINT"
HEALTH_PROBE_CONTENT = "test"
HEALTHY_STATUS_CODES = (200, 400)

# --- Extraction limits ---
MIN_TEXT_LENGTH = 20  # shorter nodes are decorative/empty
MIN_CANDIDATE_TEXT = 50  # locate() skips nodes at or below this
SUBJECT_MAX = 200
SENDER_MAX = 100
BODY_MAX = 5000
AGENDA_MAX = 120
HASH_PREFIX_LENGTH = 200

DEFAULT_SUBJECT = "No Subject"
DEFAULT_SENDER = "Unknown Sender"
DEFAULT_COMPANY = "Unknown Company"
NOT_SPECIFIED = "Not specified"
PLACEHOLDER_VALUES = {"", "not specified", "unknown", "unknown company", "n/a", "none"}

# --- Identity attributes, highest priority first ---
IDENTITY_ATTRIBUTES = [
    ("data-thread-id", "thread"),
    ("data-message-id", "msg"),
    ("data-legacy-thread-id", "legacy"),
    ("id", "elem"),
]

# --- Gmail selectors ---
CANDIDATE_SELECTORS = [
    # Conversation view
    "[data-thread-id]",
    ".ii.gt .a3s.aiL",
    # Inbox list view
    '[role="listitem"] [data-message-id]',
    ".nH .if",
    ".gs .gE.iv.gt",
    ".adn.ads",
    ".aeN .aP3",
    "tr.zA",
    ".cf.zt",
]
SUBJECT_SELECTORS = ["[data-subject]", ".bog", ".hP", ".y6", "span[data-thread-id]"]
SENDER_SELECTORS = [
    "[email]",
    ".go .g2",
    ".yW span[email]",
    ".yW span[name]",
    ".zF",
    ".yP",
]
LABEL_CLASS = "sponsor-guard-label"

# --- Prefilter keywords (sponsorship/partnership solicitation) ---
SPONSOR_KEYWORDS = [
    "sponsor",
    "partnership",
    "collaboration",
    "brand deal",
    "influencer",
    "campaign",
    "promotion",
    "advertising",
    "content creator",
    "social media",
    "youtube",
    "instagram",
    "tiktok",
    "brand ambassador",
    "affiliate",
    "marketing",
    "product placement",
    "endorsement",
    "paid post",
    "review",
    "feature",
    "shoutout",
    "mention",
    "brand",
    "company",
    "business",
    "opportunity",
    "proposal",
    "deal",
    "offer",
]

FREE_MAIL_DOMAINS = {
    "gmail.com",
    "googlemail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "live.com",
    "icloud.com",
    "aol.com",
    "proton.me",
    "protonmail.com",
}

# --- Scoring thresholds ---
DEFAULT_RISK_SCORE = 50
STATUS_SAFE_MAX = 40
STATUS_WARNING_MAX = 70
SPONSOR_RISK_CEILING = 50  # scores below this count as a sponsor signal
CONFIDENCE_HIGH_BELOW = 30
CONFIDENCE_MEDIUM_BELOW = 50
FALLBACK_FLAG_MESSAGE = "analysis unavailable, using fallback"

# --- Session / storage keys ---
PROCESSED_KEY_PREFIX = "processedEmails_"
SPONSOR_DETAILS_KEY = "sponsorDetails"
ACTIVITY_KEY = "recentActivity"
STAT_KEYS = {
    "scanned_emails": "scannedEmails",
    "sponsor_emails": "sponsorEmails",
    "docs_updates": "docsUpdates",
}
MAX_ACTIVITIES = 20
PERSIST_ATTEMPTS = 3
# Ledger retries block the event loop while they back off
PERSIST_BACKOFF_SECONDS = 0.01
PERSIST_BACKOFF_MAX_SECONDS = 0.05

# --- Watch mode ---
DEBOUNCE_SECONDS = 1.0
POLL_INTERVAL_SECONDS = 0.5
