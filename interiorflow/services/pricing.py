# INTERIORFLOW/backend/interiorflow/services/pricing.py : calculs des devis

import math
from typing import Any, Dict, Iterable, Optional
from interiorflow import constants


def _number(value: Any) -> float:
    """Convertit une valeur saisie en nombre (0 si absente ou invalide)"""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


# ---------- REMISE & TOTAL ----------

def subtotal(items: Iterable[Any]) -> float:
    """Somme des totalAmount des articles (dict ou objet)"""
    total = 0.0
    for item in items:
        if isinstance(item, dict):
            total += _number(item.get("totalAmount", item.get("total_amount")))
        else:
            total += _number(getattr(item, "total_amount", 0))
    return total


def discount_amount(amount: float, discount: Optional[float], discount_type: Optional[str]) -> float:
    """
    Montant de la remise : pourcentage du sous-total ou montant fixe.
    Une remise nulle ou négative ne réduit rien.
    """
    discount = _number(discount)
    if discount <= 0:
        return 0.0
    if discount_type == constants.DISCOUNT_FIXED:
        return discount
    return amount * discount / 100


def grand_total(amount: float, discount: Optional[float], discount_type: Optional[str]) -> float:
    return amount - discount_amount(amount, discount, discount_type)


# ---------- CONVERSIONS DE MESURES (saisies en cm) ----------

def cm_to_sq_feet(length_cm: Any, breadth_cm: Any) -> float:
    return _number(length_cm) * _number(breadth_cm) / constants.SQ_CM_PER_SQ_FOOT


def cm_to_feet(length_cm: Any) -> float:
    return _number(length_cm) / constants.CM_PER_FOOT


def round_sq_feet(value: float) -> int:
    """Arrondi au pied carré : partie décimale >= 0.5 arrondie au-dessus"""
    floor_value = math.floor(value)
    if value - floor_value >= 0.5:
        return math.ceil(value)
    return floor_value


# ---------- TOTAL PAR ARTICLE ----------

def _measurements(value: Any) -> list:
    """Mesures supplémentaires d'un article ; les entrées mal formées sont ignorées"""
    if not isinstance(value, list):
        return []
    return [m for m in value if isinstance(m, dict)]


def interior_item_total(item: Dict[str, Any]) -> float:
    """Total d'un article de devis intérieur selon son type de mesure"""
    item_type = item.get("type")
    rate = _number(item.get("amountPerSqFt"))

    if item_type == "area":
        sq_feet = cm_to_sq_feet(item.get("length"), item.get("breadth"))
        for measurement in _measurements(item.get("measurements")):
            sq_feet += cm_to_sq_feet(measurement.get("length"), measurement.get("breadth"))
        return round_sq_feet(sq_feet) * rate

    if item_type == "pieces":
        return _number(item.get("pieces")) * rate

    if item_type in ("running", "running_sq_feet"):
        feet = cm_to_feet(item.get("runningLength"))
        for measurement in _measurements(item.get("runningMeasurements")):
            feet += cm_to_feet(measurement.get("length"))
        return feet * rate

    return 0.0


def price_interior_items(items: Iterable[Dict[str, Any]]) -> list:
    """Garde le totalAmount saisi ; le calcule depuis les mesures s'il manque"""
    priced = []
    for item in items:
        item = dict(item)
        if item.get("totalAmount") is None:
            item["totalAmount"] = interior_item_total(item)
        else:
            item["totalAmount"] = _number(item["totalAmount"])
        priced.append(item)
    return priced


def general_item_total(sq_feet: Any, amount_per_sq_ft: Any) -> float:
    return _number(sq_feet) * _number(amount_per_sq_ft)
