"""
Delivery models: clients, couriers, orders and the meals on each order.
"""

from sqlalchemy import (
    Column,
    String,
    Integer,
    DateTime,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base


class Client(Base):
    """Customer placing orders, keyed by email"""

    __tablename__ = "client"

    email = Column(String(32), primary_key=True)
    name = Column(String(50), nullable=False)
    phone = Column(String(10), nullable=False)

    def __repr__(self):
        return f"<Client(email='{self.email}', name='{self.name}')>"


class Courier(Base):
    """Courier delivering orders, keyed by phone number"""

    __tablename__ = "courier"

    phone = Column(String(10), primary_key=True)
    name = Column(String(50), nullable=False)
    transport = Column(String(25), nullable=False)

    def __repr__(self):
        return f"<Courier(phone='{self.phone}', name='{self.name}')>"


class Order(Base):
    """Delivery order linking a courier and a client"""

    __tablename__ = "order"

    order_id = Column(Integer, primary_key=True, autoincrement=False)
    order_date = Column(DateTime, nullable=False)
    courier_phone = Column(
        String(10), ForeignKey("courier.phone"), nullable=False, index=True
    )
    delivery_date = Column(DateTime, nullable=False)
    client_email = Column(
        String(32), ForeignKey("client.email"), nullable=False, index=True
    )
    rating = Column(Integer, nullable=False)
    delivery_address = Column(String(50), nullable=False)

    # Many-to-one only: deleting a courier or client never touches orders from the ORM side
    courier = relationship("Courier")
    client = relationship("Client")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_order_rating_range"),
    )

    def __repr__(self):
        return f"<Order(order_id={self.order_id}, client_email='{self.client_email}')>"


class Meal(Base):
    """Meal belonging to an order"""

    __tablename__ = "meal"

    meal_id = Column(Integer, primary_key=True, autoincrement=False)
    order_id = Column(
        Integer, ForeignKey("order.order_id"), nullable=False, index=True
    )
    name = Column(String(25), nullable=False)
    price = Column(Integer, nullable=False)
    weight = Column(Integer, nullable=False)
    serving_size = Column(Integer, nullable=False)

    order = relationship("Order")

    def __repr__(self):
        return f"<Meal(meal_id={self.meal_id}, name='{self.name}')>"
