# INTERIORFLOW/backend/interiorflow/schemas/schemas.py

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime


class CamelModel(BaseModel):
    """Le frontend parle camelCase : on accepte les deux formes en entrée,
    on renvoie du camelCase en sortie."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


# ---------- AUTH / USER SCHEMAS ----------
# Champs optionnels : la présence est vérifiée dans les routes pour
# renvoyer un message d'erreur explicite (400).

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = ""


class Identity(CamelModel):
    """Identité embarquée dans le token"""
    user_id: str
    email: str
    role: str


class UserOut(CamelModel):
    id: str
    email: str
    name: Optional[str] = ""
    role: str


# ---------- CLIENT SCHEMAS ----------

class ClientIn(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class ClientOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    location: str
    created_at: datetime


# ---------- BANK SCHEMAS ----------

class BankIn(CamelModel):
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    ifsc_code: Optional[str] = None
    upi_id: Optional[str] = None


class BankOut(CamelModel):
    id: str
    bank_name: str
    account_name: str
    account_number: str
    account_type: str
    ifsc_code: str
    upi_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


# ---------- QUOTE SCHEMAS ----------
# Formulaire public du site vitrine : snake_case, aucun champ obligatoire.

class QuoteIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    request_call: Optional[bool] = None
    service_interest: Optional[str] = None
    sq_feet: Optional[float] = None
    package: Optional[str] = None
    additional_info: Optional[str] = None


class QuoteOut(BaseModel):
    id: str
    name: str
    phone: str
    request_call: bool
    service_interest: str
    sq_feet: float
    package: str
    additional_info: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)


# ---------- CATALOGUE SCHEMAS ----------

class CategoryIn(CamelModel):
    name: Optional[str] = None


class CategoryOut(CamelModel):
    id: str
    name: str
    created_at: datetime


class SubCategoryIn(CamelModel):
    name: Optional[str] = None
    category_id: Optional[str] = None


class SubCategoryOut(CamelModel):
    id: str
    name: str
    category_id: str
    category_name: Optional[str] = None
    created_at: datetime


class SectionIn(CamelModel):
    category_id: Optional[str] = None
    sub_category_id: Optional[str] = None
    material: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[str] = None


class SectionOut(CamelModel):
    id: str
    category_id: str
    category_name: Optional[str] = None
    sub_category_id: str
    sub_category_name: Optional[str] = None
    material: str
    description: str
    amount: float
    type: str
    created_at: datetime


# ---------- INTERIOR ESTIMATE SCHEMAS ----------
# Les articles restent des dictionnaires libres (mesures variables selon le type).

class InteriorEstimateIn(CamelModel):
    client_id: Optional[str] = None
    estimate_name: Optional[str] = None
    items: Optional[List[Dict[str, Any]]] = None
    discount: Optional[float] = 0
    discount_type: Optional[str] = None


class InteriorEstimateUpdate(CamelModel):
    estimate_name: Optional[str] = None
    items: Optional[List[Dict[str, Any]]] = None
    discount: Optional[float] = 0
    discount_type: Optional[str] = None


class EstimateStatusUpdate(CamelModel):
    status: Optional[str] = None


class InteriorEstimateOut(CamelModel):
    id: str
    user_id: str
    client_id: str
    estimate_name: str
    items: List[Dict[str, Any]] = Field(default_factory=list)
    total_amount: float
    discount: float
    discount_type: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class InteriorPresetIn(CamelModel):
    name: Optional[str] = None
    items: Optional[List[Dict[str, Any]]] = None


class InteriorPresetOut(CamelModel):
    id: str
    name: str
    items: List[Dict[str, Any]] = Field(default_factory=list)
    total_amount: float
    created_at: datetime
    updated_at: Optional[datetime] = None


# ---------- GENERAL ESTIMATE SCHEMAS ----------

class GeneralEstimateItem(CamelModel):
    id: Optional[str] = None
    particulars: str = ""
    amount_per_sq_ft: float = 0
    sq_feet: float = 0
    total_amount: float = 0


class GeneralEstimateIn(CamelModel):
    client_id: Optional[str] = None
    estimate_name: Optional[str] = None
    estimate_type: Optional[str] = None
    items: List[GeneralEstimateItem] = Field(default_factory=list)
    discount: Optional[float] = 0
    discount_type: Optional[str] = None


class GeneralEstimateUpdate(CamelModel):
    items: List[GeneralEstimateItem] = Field(default_factory=list)
    discount: Optional[float] = 0
    discount_type: Optional[str] = None


class GeneralEstimateOut(CamelModel):
    id: str
    user_id: str
    client_id: str
    estimate_name: str
    estimate_type: str
    items: List[GeneralEstimateItem] = Field(default_factory=list)
    subtotal: float
    total_amount: float
    discount: float
    discount_type: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


# ---------- STAGE SCHEMAS ----------

class StageIn(CamelModel):
    client_id: Optional[str] = None
    stage_desc: Optional[str] = None
    date: Optional[datetime] = None


class StageOut(CamelModel):
    id: str
    user_id: str
    client_id: str
    date: datetime
    stage_desc: str
    created_at: datetime


# ---------- INCOME SCHEMAS ----------

class InteriorIncomeIn(CamelModel):
    client_id: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[datetime] = None


class InteriorIncomeUpdate(CamelModel):
    status: Optional[str] = None
    method: Optional[str] = None
    marked_by: Optional[str] = None
    amount: Optional[float] = None


class InteriorIncomeOut(CamelModel):
    id: str
    user_id: str
    client_id: str
    amount: float
    status: str
    method: Optional[str] = None
    marked_by: Optional[str] = None
    date: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None


# ---------- EXPENSE SCHEMAS ----------

class ExpenseIn(CamelModel):
    client_id: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = ""
    amount: Optional[float] = None
    date: Optional[datetime] = None


class ExpenseOut(CamelModel):
    id: str
    user_id: str
    client_id: str
    category: str
    notes: str
    amount: float
    date: datetime
    added_by: str
    created_at: datetime


class CommonExpenseIn(CamelModel):
    category: Optional[str] = None
    notes: Optional[str] = ""
    amount: Optional[float] = None
    date: Optional[datetime] = None


class CommonExpenseOut(CamelModel):
    id: str
    user_id: str
    category: str
    notes: str
    amount: float
    date: datetime
    added_by: str
    created_at: datetime
