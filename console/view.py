"""
Text-menu view: everything the user sees or types goes through here.

The view never talks to services. Input and output functions are injectable
so a scripted session can drive it.
"""

from typing import Callable, List, Optional, Sequence

from domain.enums import EntityKind
from domain.errors import (
    DuplicateKeyError,
    Error,
    ForeignKeyConstraintError,
    RecordNotFound,
)
from domain.schemas import (
    ClientAnalytics,
    ClientDTO,
    ClientFilterParameters,
    ClientOrderCount,
    ClientRecord,
    CourierAnalytics,
    CourierDTO,
    CourierFilterParameters,
    CourierOrderCount,
    CourierRecord,
    MealDTO,
    MealRecord,
    OrderDTO,
    OrderRecord,
)

RULE = "=" * 57
DISPLAY_DATE_FORMAT = "%Y-%m-%d %H:%M"
# current values offered for editing keep their seconds
EDIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAIN_MENU = (
    "Clients - manage client information",
    "Couriers - manage courier details",
    "Meals - manage ordered dishes",
    "Orders - track and update orders",
    "Analytics - client and courier statistics",
    "Exit",
)
ENTITY_MENU = ("Add", "View all", "Update", "Delete")
CLIENT_EXTRAS = ("Client with most orders", "Generate random clients")
COURIER_EXTRAS = ("Couriers with most orders", "Generate random couriers")
ANALYTICS_MENU = ("Client analytics", "Courier analytics", "Back to main menu")


class View:
    def __init__(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.read = read
        self.write = write

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _options(self, title: str, options: Sequence[str]) -> None:
        self.write(RULE)
        self.write(f"  {title}")
        self.write(RULE)
        for number, option in enumerate(options, start=1):
            self.write(f"  [{number}] {option}")

    def _table(self, headers: Sequence[str], widths: Sequence[int], rows: List[Sequence]) -> None:
        separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

        def line(values):
            cells = (f" {str(v):<{w}} " for v, w in zip(values, widths))
            return "|" + "|".join(cells) + "|"

        self.write(separator)
        self.write(line(headers))
        self.write(separator)
        for row in rows:
            self.write(line(row))
        self.write(separator)

    def prompt(self, text: str) -> str:
        return self.read(text).strip()

    def prompt_optional(self, text: str, current: str) -> str:
        """Prompt showing the current value; empty input keeps it"""
        value = self.prompt(f"{text} [{current}] (Enter keeps current): ")
        return value or current

    def prompt_int(self, text: str) -> int:
        while True:
            raw = self.prompt(text)
            try:
                return int(raw)
            except ValueError:
                self.show_try_again()

    def prompt_int_optional(self, text: str, current: int) -> int:
        while True:
            raw = self.prompt(f"{text} [{current}] (Enter keeps current): ")
            if not raw:
                return current
            try:
                return int(raw)
            except ValueError:
                self.show_try_again()

    def choice(self, low: int, high: int) -> int:
        """Read a menu choice in [low, high], asking again on anything else"""
        while True:
            raw = self.prompt(">> ")
            if raw.isdecimal() and low <= int(raw) <= high:
                return int(raw)
            self.show_try_again()

    def show_try_again(self) -> None:
        self.write("Invalid input. Please try again.")

    def show_message(self, message: str) -> None:
        self.write(message)

    def show_error(self, error: Error) -> None:
        if isinstance(error, DuplicateKeyError):
            self.write(f"Error! A record with this key already exists: {error.key}")
        elif isinstance(error, ForeignKeyConstraintError):
            self.write(f"Error! Foreign key constraint violated for {error.field}: {error.value}")
            self.write("Please ensure that the referenced record exists in the database.")
        elif isinstance(error, RecordNotFound) and error.identifier:
            self.write(f"Error! Record not found: '{error.identifier}'")
        else:
            self.write(f"Error! {error.message}")

    def show_query_runtime(self, elapsed_ms: float) -> None:
        self.write(f"Query runtime: {elapsed_ms:.2f} msec.")

    # ------------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------------

    def show_main_menu(self) -> None:
        self.write(RULE)
        self.write("  WELCOME TO THE DELIVERY MANAGEMENT SYSTEM")
        self._options("Select a table to manage:", MAIN_MENU)

    def show_entity_menu(self, kind: EntityKind, extras: Sequence[str] = ()) -> int:
        """Show a table submenu; returns the number of options"""
        options = [f"{action} {kind.value.lower()}" for action in ENTITY_MENU]
        options.extend(extras)
        options.append("Back to main menu")
        self._options(f"{kind.value.upper()}S TABLE MANAGEMENT", options)
        return len(options)

    def show_analytics_menu(self) -> None:
        self._options("ANALYTICS", ANALYTICS_MENU)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def prompt_client(self) -> ClientDTO:
        first = self.prompt("Enter client first name: ")
        last = self.prompt("Enter client last name: ")
        return ClientDTO(
            name=f"{first} {last}",
            email=self.prompt("Enter client email: "),
            phone=self.prompt("Enter client phone number: "),
        )

    def prompt_client_email(self) -> str:
        return self.prompt("Enter the client's email: ")

    def prompt_client_update(self, existing: ClientRecord) -> ClientDTO:
        self.write(f"Updating details for client: {existing.name}")
        return ClientDTO(
            email=existing.email,
            name=self.prompt_optional("Name", existing.name),
            phone=self.prompt_optional("Phone", existing.phone),
        )

    def show_clients(self, clients: List[ClientRecord]) -> None:
        self._table(
            ("Email", "Name", "Phone"),
            (32, 20, 10),
            [(c.email, c.name, c.phone) for c in clients],
        )

    def show_client_with_most_orders(self, top: ClientOrderCount) -> None:
        self.write("CLIENT WITH MOST ORDERS")
        self._table(
            ("Order Count", "Email", "Name", "Phone"),
            (11, 32, 20, 10),
            [(top.order_count, top.client.email, top.client.name, top.client.phone)],
        )

    # ------------------------------------------------------------------
    # Couriers
    # ------------------------------------------------------------------

    def prompt_courier(self) -> CourierDTO:
        phone = self.prompt("Enter courier phone: ")
        first = self.prompt("Enter courier first name: ")
        last = self.prompt("Enter courier last name: ")
        return CourierDTO(
            phone=phone,
            name=f"{first} {last}",
            transport=self.prompt("Enter courier transport: "),
        )

    def prompt_courier_phone(self) -> str:
        return self.prompt("Enter the courier's phone: ")

    def prompt_courier_update(self, existing: CourierRecord) -> CourierDTO:
        self.write(f"Updating details for courier: {existing.name}")
        return CourierDTO(
            phone=existing.phone,
            name=self.prompt_optional("Name", existing.name),
            transport=self.prompt_optional("Transport", existing.transport),
        )

    def show_couriers(self, couriers: List[CourierRecord]) -> None:
        self._table(
            ("Phone", "Name", "Transport"),
            (10, 20, 20),
            [(c.phone, c.name, c.transport) for c in couriers],
        )

    def show_couriers_with_most_orders(self, ranking: List[CourierOrderCount]) -> None:
        self.write(f"TOP {len(ranking)} COURIERS WITH THE MOST ORDERS")
        self._table(
            ("Name", "Phone", "Order Count"),
            (20, 10, 11),
            [(r.courier.name, r.courier.phone, r.order_count) for r in ranking],
        )

    def prompt_number_of_records(self, default: Optional[int] = None) -> int:
        if default is None:
            return self.prompt_int("Enter the number of records: ")
        return self.prompt_int_optional("Enter the number of records", default)

    # ------------------------------------------------------------------
    # Meals
    # ------------------------------------------------------------------

    def prompt_meal(self) -> MealDTO:
        return MealDTO(
            meal_id=self.prompt_int("Enter meal ID: "),
            order_id=self.prompt_int("Enter meal order ID: "),
            name=self.prompt("Enter meal name: "),
            price=self.prompt_int("Enter meal price: "),
            weight=self.prompt_int("Enter meal weight: "),
            serving_size=self.prompt_int("Enter meal serving size: "),
        )

    def prompt_meal_id(self) -> int:
        return self.prompt_int("Enter the meal's ID: ")

    def prompt_meal_update(self, existing: MealRecord) -> MealDTO:
        self.write(f"Updating details for meal: {existing.name}")
        return MealDTO(
            meal_id=existing.meal_id,
            order_id=existing.order_id,
            name=self.prompt_optional("Name", existing.name),
            price=self.prompt_int_optional("Price", existing.price),
            weight=self.prompt_int_optional("Weight", existing.weight),
            serving_size=self.prompt_int_optional("Serving size", existing.serving_size),
        )

    def show_meals(self, meals: List[MealRecord]) -> None:
        self._table(
            ("Meal ID", "Order ID", "Name", "Price", "Weight", "Serving Size"),
            (10, 10, 25, 10, 10, 12),
            [(m.meal_id, m.order_id, m.name, m.price, m.weight, m.serving_size) for m in meals],
        )

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def prompt_order(self) -> OrderDTO:
        return OrderDTO(
            order_id=self.prompt_int("Enter order ID: "),
            order_date=self.prompt("Enter order date (yyyy-mm-dd hh:mm): "),
            courier_phone=self.prompt("Enter order courier phone: "),
            delivery_date=self.prompt("Enter order delivery date (yyyy-mm-dd hh:mm): "),
            client_email=self.prompt("Enter order client email: "),
            rating=self.prompt_int("Enter order rating between 1 and 5: "),
            delivery_address=self.prompt("Enter order delivery address (street number): "),
        )

    def prompt_order_id(self) -> int:
        return self.prompt_int("Enter the order's ID: ")

    def prompt_order_update(self, existing: OrderRecord) -> OrderDTO:
        self.write(f"Updating details for order: {existing.order_id}")
        return OrderDTO(
            order_id=existing.order_id,
            order_date=self.prompt_optional(
                "Order date", existing.order_date.strftime(EDIT_DATE_FORMAT)
            ),
            delivery_date=self.prompt_optional(
                "Delivery date", existing.delivery_date.strftime(EDIT_DATE_FORMAT)
            ),
            rating=self.prompt_int_optional("Rating between 1 and 5", existing.rating),
            delivery_address=self.prompt_optional("Delivery address", existing.delivery_address),
            courier_phone=existing.courier_phone,
            client_email=existing.client_email,
        )

    def show_orders(self, orders: List[OrderRecord]) -> None:
        self._table(
            (
                "Order ID",
                "Order Date",
                "Courier Phone",
                "Delivery Date",
                "Client Email",
                "Rating",
                "Delivery Address",
            ),
            (10, 16, 13, 16, 32, 6, 30),
            [
                (
                    o.order_id,
                    o.order_date.strftime(DISPLAY_DATE_FORMAT),
                    o.courier_phone,
                    o.delivery_date.strftime(DISPLAY_DATE_FORMAT),
                    o.client_email,
                    o.rating,
                    o.delivery_address,
                )
                for o in orders
            ],
        )

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def prompt_client_filter(self) -> ClientFilterParameters:
        start = self.prompt("Enter the start date of order (yyyy-mm-dd hh:mm): ")
        max_price = self.prompt_int("Enter maximum price of meal: ")
        email = self.prompt("Enter client email pattern (% matches anything): ")
        return ClientFilterParameters(
            start_order_date=start, max_meal_price=max_price, email=email or "%"
        )

    def show_client_analytics(self, analytics: ClientAnalytics) -> None:
        self._table(
            ("Client Name", "Order Count", "Total Spent"),
            (20, 12, 12),
            [(analytics.name, analytics.order_count, analytics.total_spent)],
        )

    def prompt_courier_filter(self) -> CourierFilterParameters:
        start = self.prompt("Enter the start date of delivery (yyyy-mm-dd): ")
        min_rating = self.prompt_int("Enter minimum rating: ")
        return CourierFilterParameters(start_delivery_date=start, min_rating=min_rating)

    def show_courier_analytics(self, rows: List[CourierAnalytics]) -> None:
        self._table(
            ("Courier Name", "Phone", "Average Rating", "Last Delivery Date", "First Order Date"),
            (20, 10, 14, 18, 16),
            [
                (
                    r.name,
                    r.phone,
                    f"{r.average_rating:.2f}",
                    r.last_delivery_date.strftime(DISPLAY_DATE_FORMAT),
                    r.first_order_date.strftime(DISPLAY_DATE_FORMAT),
                )
                for r in rows
            ],
        )
