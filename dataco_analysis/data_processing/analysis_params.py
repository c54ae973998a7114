"""
Centralized Parameters for the Supply Chain Analysis

Single place for the thresholds, windows and label tables the queries use.
"""

# =============================================================================
# SALES ANOMALY WINDOW
# =============================================================================

# Months of the late-2017 sales collapse
ANOMALY_MONTHS = ("2017-11", "2017-12", "2018-01")

# Months strictly before this key form the "normal" baseline
NORMAL_BEFORE = "2017-11"

# Z-score beyond which a monthly total is flagged as spike/drop
MONTHLY_Z_THRESHOLD = 1.5

# =============================================================================
# DELIVERY
# =============================================================================

LATE_DELIVERY_STATUS = "Late delivery"

# =============================================================================
# RFM SEGMENTATION
# =============================================================================

RFM_BUCKETS = 4

SEGMENT_CHAMPIONS = "Champions"
SEGMENT_LOYAL = "Loyal Customers"
SEGMENT_AT_RISK = "At Risk (High Value)"
SEGMENT_HIBERNATING = "Hibernating"
SEGMENT_NEW = "New Customers"
SEGMENT_REGULAR = "Regular"

# =============================================================================
# HYPOTHESIS TESTING
# =============================================================================

GROUP_DELAYED = "Experienced Delays"
GROUP_ON_TIME = "No Delays"
TTEST_ALPHA = 0.05

# =============================================================================
# REGRESSION PREPARATION
# =============================================================================

REGRESSION_SAMPLE_SIZE = 20000

# feature name -> category value flagged
CATEGORY_FLAGS = {
    "is_fishing": "Fishing",
    "is_cleats": "Cleats",
    "is_camping": "Camping & Hiking",
    "is_cardio": "Cardio Equipment",
}

# feature name -> market value flagged
MARKET_FLAGS = {
    "is_latam": "LATAM",
    "is_europe": "Europe",
    "is_usca": "USCA",
    "is_africa": "Africa",
}

REGRESSION_TARGET = "profit_ratio"
