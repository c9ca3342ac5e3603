# src/schemas/diet_plan_schemas.py
from typing import Dict, List, Optional
from .base_schemas import BaseSchema, WriteSchema, IDMixin, TimestampMixin, AuthorMixin


class DietPlanBase(BaseSchema):
    patient_id: str
    admission_id: Optional[str] = None
    # meal name -> items, e.g. {"breakfast": ["oats", "banana"]}
    plan: Dict[str, List[str]]
    special_instructions: Optional[str] = None


class DietPlanCreate(DietPlanBase, WriteSchema):
    pass


class DietPlanUpdate(WriteSchema):
    plan: Optional[Dict[str, List[str]]] = None
    special_instructions: Optional[str] = None


class DietPlan(IDMixin, DietPlanBase, AuthorMixin, TimestampMixin):
    """Stored diet plan document"""
