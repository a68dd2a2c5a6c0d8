# INTERIORFLOW/backend/interiorflow/constants.py

# Rôles utilisateurs
ROLE_USER = "user"
ROLE_ADMIN = "admin"

# Statuts d'un devis (intérieur ou général)
ESTIMATE_PENDING = "pending"
ESTIMATE_APPROVED = "approved"
ESTIMATE_COMPLETED = "completed"

# Statuts d'un encaissement
INCOME_PENDING = "pending"
INCOME_PAID = "paid"
INCOME_COMPLETED = "completed"
INCOME_STATUSES = [INCOME_PENDING, INCOME_PAID, INCOME_COMPLETED]
RECEIVED_INCOME_STATUSES = [INCOME_PAID, INCOME_COMPLETED]

PAYMENT_METHODS = {
    "cash": "Cash",
    "bank": "Bank"
}

SECTION_TYPES = ["pieces", "area", "running_sq_feet"]

DISCOUNT_PERCENTAGE = "percentage"
DISCOUNT_FIXED = "fixed"
DISCOUNT_TYPES = [DISCOUNT_PERCENTAGE, DISCOUNT_FIXED]

GENERAL_ESTIMATE_TYPES = ["permit", "building", "3d", "other"]

COMMON_EXPENSE_CATEGORIES = [
    "rent", "electricity", "wifi", "employee salary", "traveling", "others"
]

# Étape insérée automatiquement lors de l'approbation d'un devis
STAGE_APPROVED = "approved"

# Part du total encaissée à l'approbation (acompte)
APPROVAL_INCOME_SHARE = 0.5

# Conversions (mesures saisies en centimètres)
SQ_CM_PER_SQ_FOOT = 929.03
CM_PER_FOOT = 30.48

ACTIVE_USER_WINDOW_DAYS = 7
