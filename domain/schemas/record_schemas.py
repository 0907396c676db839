"""
Schemas for client, courier, meal and order records.

``*DTO`` schemas carry raw field values from the console into the record
service. They accept any string (or None): field syntax is checked by the
validators, so a malformed value reaches the service and comes back as a
ValidationError instead of failing here. ``*Record`` schemas are what
repositories return.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ClientDTO(BaseModel):
    """Client fields as entered"""

    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class CourierDTO(BaseModel):
    """Courier fields as entered"""

    phone: Optional[str] = None
    name: Optional[str] = None
    transport: Optional[str] = None


class MealDTO(BaseModel):
    """Meal fields as entered"""

    meal_id: int
    order_id: Optional[int] = None
    name: Optional[str] = None
    price: int = 0
    weight: int = 0
    serving_size: int = 0


class OrderDTO(BaseModel):
    """Order fields as entered; dates are 'YYYY-MM-DD HH:MM[:SS]' strings"""

    order_id: int
    order_date: Optional[str] = None
    delivery_date: Optional[str] = None
    rating: Optional[int] = None
    delivery_address: Optional[str] = None
    courier_phone: Optional[str] = None
    client_email: Optional[str] = None


class ClientRecord(BaseModel):
    email: str
    name: str
    phone: str

    model_config = {"from_attributes": True}


class CourierRecord(BaseModel):
    phone: str
    name: str
    transport: str

    model_config = {"from_attributes": True}


class MealRecord(BaseModel):
    meal_id: int
    order_id: int
    name: str
    price: int
    weight: int
    serving_size: int

    model_config = {"from_attributes": True}


class OrderRecord(BaseModel):
    order_id: int
    order_date: datetime
    delivery_date: datetime
    rating: int
    delivery_address: str
    courier_phone: str
    client_email: str

    model_config = {"from_attributes": True}
