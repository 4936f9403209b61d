"""
Hebrew label constants printed on the delivery receipt.

All anchors are matched as substrings unless the caller asks for an exact
line match.
"""

# ─── Header block ─────────────────────────────────────────────────────────────

DELIVERY_DOCUMENT   = 'תעודת משלוח'
ORDER_NUMBER_LABEL  = 'מס. הזמנה:'
ORDER_DATE_LABEL    = 'ת. הזמנה:'
DELIVERY_DATE_LABEL = 'ת. אספקה:'

# ─── Customer block ───────────────────────────────────────────────────────────

CUSTOMER_NAME_LABEL = 'שם לקוח:'
PHONE_LABEL         = 'טלפון:'
ADDRESS_LABEL       = 'כתובת:'
FLOOR_MARKER        = 'קומה.:'
APARTMENT_MARKER    = 'דירה.:'

# Composed address: "{street} {city}, קומה {floor}, דירה {apartment}"
FLOOR_WORD     = 'קומה'
APARTMENT_WORD = 'דירה'

# ─── Item tables ──────────────────────────────────────────────────────────────

ITEMS_HEADER    = 'הערות סה"כ מחיר סופק הוזמן תאור קוד פריט'
PROMOTION_MARK  = 'מבצע:'
PLACEHOLDER     = '----'

UNIT_TAG      = 'יח'   # sold by unit
KILOGRAM_TAG  = 'קג'   # sold by weight
PACKAGE_TAG   = 'ימ'   # package, reconciled by weight

# ─── Summary block ────────────────────────────────────────────────────────────

SUBTOTAL_LABEL      = 'סך הכל'
DELIVERY_FEE_WORDS  = ('דמי', 'משלוח')
VAT_WORDS           = ('%', 'מע"מ')
TOTAL_LABEL         = 'סכום לתשלום'
