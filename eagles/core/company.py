"""
Company details printed on every quote.

Contact fields can be overridden per deployment with COMPANY_* env vars;
banking details and disclaimers are fixed.
"""

import os

COMPANY = {
    "name":    os.environ.get("COMPANY_NAME", "EAGLES EVENTS"),
    "tagline": os.environ.get("COMPANY_TAGLINE", "Creating Unforgettable Moments"),
    "address": os.environ.get("COMPANY_ADDRESS", "Phiva St, Protea Glen, Soweto, 1819"),
    "phone":   os.environ.get("COMPANY_PHONE", "083-989-4082 / 068-078-0301"),
    "email":   os.environ.get("COMPANY_EMAIL", "eaglesevents581@gmail.com"),
}

CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "R")

BANKING = [
    ("Bank:",           "First National Bank (FNB)"),
    ("Account Name:",   "Eagles Events"),
    ("Account Number:", "628 123 456 78"),
    ("Branch Code:",    "250 655"),
    ("Reference:",      "Use Quote Reference or Customer Name"),
    ("Swift Code:",     "FIRNZAJJ (for international transfers)"),
]

VALIDITY_DAYS = 14

FOOTER_LINES = [
    "Thank you for choosing Eagles Events",
    f"This quotation is valid for {VALIDITY_DAYS} days unless otherwise stated",
    "For any questions or modifications, please contact us immediately",
]
