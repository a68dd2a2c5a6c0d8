# INTERIORFLOW/backend/interiorflow/models/models.py

import uuid
from sqlalchemy import Column, String, Float, Boolean, DateTime, JSON, Text
from datetime import datetime
from interiorflow.database import Base
from interiorflow import constants


def new_id():
    return uuid.uuid4().hex


# Les références entre entités (client_id, user_id, ...) sont de simples
# identifiants texte, sans clé étrangère en base.

class User(Base):
    __tablename__ = "users"
    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String, default="")
    role = Column(String, default=constants.ROLE_USER, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Client(Base):
    __tablename__ = "clients"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=False)
    location = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Bank(Base):
    __tablename__ = "banks"
    id = Column(String(32), primary_key=True, default=new_id)
    bank_name = Column(String, nullable=False)
    account_name = Column(String, nullable=False)
    account_number = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    ifsc_code = Column(String, nullable=False)
    upi_id = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Quote(Base):
    __tablename__ = "quotes"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, default="")
    phone = Column(String, default="")
    request_call = Column(Boolean, default=False)
    service_interest = Column(String, default="")
    sq_feet = Column(Float, default=0)
    package = Column(String, default="")
    additional_info = Column(Text, default="")
    created_at = Column(DateTime, default=datetime.utcnow)


# ---------- CATALOGUE ----------

class Category(Base):
    __tablename__ = "categories"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class SubCategory(Base):
    __tablename__ = "subcategories"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category_id = Column(String(32), index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Section(Base):
    __tablename__ = "sections"
    id = Column(String(32), primary_key=True, default=new_id)
    category_id = Column(String(32), index=True, nullable=False)
    sub_category_id = Column(String(32), index=True, nullable=False)
    material = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    type = Column(String, default="pieces", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


# ---------- DEVIS ----------

class InteriorEstimate(Base):
    __tablename__ = "interior_estimates"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), index=True, nullable=False)
    client_id = Column(String(32), index=True, nullable=False)
    estimate_name = Column(String, nullable=False)
    items = Column(JSON, default=list)
    total_amount = Column(Float, default=0)
    discount = Column(Float, default=0)
    discount_type = Column(String, default=constants.DISCOUNT_PERCENTAGE)
    status = Column(String, default=constants.ESTIMATE_PENDING, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class GeneralEstimate(Base):
    __tablename__ = "general_estimates"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), index=True, nullable=False)
    client_id = Column(String(32), index=True, nullable=False)
    estimate_name = Column(String, nullable=False)
    estimate_type = Column(String, nullable=False)
    items = Column(JSON, default=list)
    subtotal = Column(Float, default=0)
    total_amount = Column(Float, default=0)
    discount = Column(Float, default=0)
    discount_type = Column(String, default=constants.DISCOUNT_PERCENTAGE)
    status = Column(String, default=constants.ESTIMATE_PENDING, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class InteriorPreset(Base):
    __tablename__ = "interior_presets"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    items = Column(JSON, default=list)
    total_amount = Column(Float, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ---------- SUIVI DE PROJET & FINANCES ----------

class Stage(Base):
    __tablename__ = "stages"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False)
    client_id = Column(String(32), index=True, nullable=False)
    date = Column(DateTime, default=datetime.utcnow)
    stage_desc = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class InteriorIncome(Base):
    __tablename__ = "interior_income"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False)
    client_id = Column(String(32), index=True, nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(String, default=constants.INCOME_PENDING, nullable=False)
    method = Column(String, nullable=True)
    marked_by = Column(String, nullable=True)
    date = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Expense(Base):
    __tablename__ = "expenses"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False)
    client_id = Column(String(32), index=True, nullable=False)
    category = Column(String, nullable=False)
    notes = Column(String, default="")
    amount = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False)
    added_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CommonExpense(Base):
    __tablename__ = "common_expenses"
    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), nullable=False)
    category = Column(String, nullable=False)
    notes = Column(String, default="")
    amount = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False)
    added_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
