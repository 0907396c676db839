from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from domain.schemas.record_schemas import ClientRecord, CourierRecord


class ClientFilterParameters(BaseModel):
    """Filters for the client spend analytics"""

    start_order_date: Optional[str] = Field(
        None, description="Earliest order date, 'YYYY-MM-DD HH:MM[:SS]'"
    )
    max_meal_price: int = Field(..., description="Only meals at or below this price count")
    email: str = Field(
        "%", description="SQL LIKE pattern matched against client email (e.g. '%@example.com')"
    )


class CourierFilterParameters(BaseModel):
    """Filters for the courier rating analytics"""

    start_delivery_date: Optional[str] = Field(
        None, description="Earliest delivery date, 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM[:SS]'"
    )
    min_rating: int = Field(..., description="Minimum order rating, 1 to 5")


class ClientAnalytics(BaseModel):
    """Top client by qualifying spend"""

    name: str
    order_count: int
    total_spent: int


class CourierAnalytics(BaseModel):
    """Per-courier rating and delivery summary"""

    name: str
    phone: str
    average_rating: float
    last_delivery_date: datetime
    first_order_date: datetime


class ClientOrderCount(BaseModel):
    """Client with the number of orders placed"""

    client: ClientRecord
    order_count: int


class CourierOrderCount(BaseModel):
    """Courier with the number of orders delivered"""

    courier: CourierRecord
    order_count: int
