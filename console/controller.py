"""
Console controller - routes menu choices to the record, analytics and
generator services and hands their outcomes to the view.

Typed errors are shown and the menu continues. StoreFailureError is not
handled here; it ends the session in main.py.
"""

import logging
from typing import Callable, Optional

from domain.enums import EntityKind
from domain.errors import Error
from domain.result import Failure, Result, Success
from services import AnalyticsService, GeneratorService, RecordService
from console.view import CLIENT_EXTRAS, COURIER_EXTRAS, View

logger = logging.getLogger("fooddelivery.console")

ADD, VIEW_ALL, UPDATE, DELETE = 1, 2, 3, 4


class Controller:
    def __init__(
        self,
        records: RecordService,
        analytics: AnalyticsService,
        generator: GeneratorService,
        view: Optional[View] = None,
        top_couriers_default: int = 3,
    ):
        self.records = records
        self.analytics = analytics
        self.generator = generator
        self.view = view or View()
        self.top_couriers_default = top_couriers_default

    def run(self) -> None:
        """Main menu loop; returns on Exit or end of input"""
        handlers = {
            1: self.handle_clients,
            2: self.handle_couriers,
            3: self.handle_meals,
            4: self.handle_orders,
            5: self.handle_analytics,
        }
        try:
            while True:
                self.view.show_main_menu()
                selected = self.view.choice(1, 6)
                if selected == 6:
                    break
                handlers[selected]()
        except EOFError:
            logger.info("Input closed, leaving the session")
        self.view.show_message("Goodbye.")

    # ------------------------------------------------------------------
    # Outcome helpers
    # ------------------------------------------------------------------

    def _report(self, error: Optional[Error], success_message: str) -> None:
        if error is None:
            self.view.show_message(success_message)
        else:
            self.view.show_error(error)

    def _with_record(self, lookup: Result, action: Callable) -> None:
        if isinstance(lookup, Failure):
            self.view.show_error(lookup.error)
            return
        action(lookup.value)

    def _crud(
        self,
        kind: EntityKind,
        selected: int,
        *,
        prompt_add,
        show_all,
        prompt_key,
        get,
        prompt_update,
        add,
        update,
        delete,
        get_all,
    ) -> None:
        """Run one of the four table actions shared by every record kind"""
        label = kind.value
        if selected == ADD:
            dto = prompt_add()
            self._report(add(dto), f"{label} successfully added.")
        elif selected == VIEW_ALL:
            show_all(get_all())
        elif selected == UPDATE:
            self._with_record(
                get(prompt_key()),
                lambda existing: self._report(
                    update(prompt_update(existing)), f"{label} details updated successfully."
                ),
            )
        elif selected == DELETE:
            self._report(delete(prompt_key()), f"{label} successfully deleted.")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def handle_clients(self) -> None:
        while True:
            back = self.view.show_entity_menu(EntityKind.CLIENT, CLIENT_EXTRAS)
            selected = self.view.choice(1, back)
            if selected == back:
                return
            if selected == 5:
                self.show_client_with_most_orders()
            elif selected == 6:
                self._generate(self.generator.generate_clients, "clients")
            else:
                self._crud(
                    EntityKind.CLIENT,
                    selected,
                    prompt_add=self.view.prompt_client,
                    show_all=self.view.show_clients,
                    prompt_key=self.view.prompt_client_email,
                    get=self.records.get_client,
                    prompt_update=self.view.prompt_client_update,
                    add=self.records.add_client,
                    update=self.records.update_client,
                    delete=self.records.delete_client,
                    get_all=self.records.get_all_clients,
                )

    def handle_couriers(self) -> None:
        while True:
            back = self.view.show_entity_menu(EntityKind.COURIER, COURIER_EXTRAS)
            selected = self.view.choice(1, back)
            if selected == back:
                return
            if selected == 5:
                self.show_couriers_with_most_orders()
            elif selected == 6:
                self._generate(self.generator.generate_couriers, "couriers")
            else:
                self._crud(
                    EntityKind.COURIER,
                    selected,
                    prompt_add=self.view.prompt_courier,
                    show_all=self.view.show_couriers,
                    prompt_key=self.view.prompt_courier_phone,
                    get=self.records.get_courier,
                    prompt_update=self.view.prompt_courier_update,
                    add=self.records.add_courier,
                    update=self.records.update_courier,
                    delete=self.records.delete_courier,
                    get_all=self.records.get_all_couriers,
                )

    def handle_meals(self) -> None:
        while True:
            back = self.view.show_entity_menu(EntityKind.MEAL)
            selected = self.view.choice(1, back)
            if selected == back:
                return
            self._crud(
                EntityKind.MEAL,
                selected,
                prompt_add=self.view.prompt_meal,
                show_all=self.view.show_meals,
                prompt_key=self.view.prompt_meal_id,
                get=self.records.get_meal,
                prompt_update=self.view.prompt_meal_update,
                add=self.records.add_meal,
                update=self.records.update_meal,
                delete=self.records.delete_meal,
                get_all=self.records.get_all_meals,
            )

    def handle_orders(self) -> None:
        while True:
            back = self.view.show_entity_menu(EntityKind.ORDER)
            selected = self.view.choice(1, back)
            if selected == back:
                return
            self._crud(
                EntityKind.ORDER,
                selected,
                prompt_add=self.view.prompt_order,
                show_all=self.view.show_orders,
                prompt_key=self.view.prompt_order_id,
                get=self.records.get_order,
                prompt_update=self.view.prompt_order_update,
                add=self.records.add_order,
                update=self.records.update_order,
                delete=self.records.delete_order,
                get_all=self.records.get_all_orders,
            )

    # ------------------------------------------------------------------
    # Most active records, generation, analytics
    # ------------------------------------------------------------------

    def show_client_with_most_orders(self) -> None:
        timed = self.analytics.client_with_most_orders()
        if timed.value is None:
            self.view.show_message("No clients with orders found.")
        else:
            self.view.show_client_with_most_orders(timed.value)
        self.view.show_query_runtime(timed.elapsed_ms)

    def show_couriers_with_most_orders(self) -> None:
        n = self.view.prompt_number_of_records(self.top_couriers_default)
        timed = self.analytics.couriers_with_most_orders(n)
        if isinstance(timed.value, Failure):
            self.view.show_error(timed.value.error)
            return
        if not timed.value.value:
            self.view.show_message("No couriers found.")
        else:
            self.view.show_couriers_with_most_orders(timed.value.value)
        self.view.show_query_runtime(timed.elapsed_ms)

    def _generate(self, generate: Callable[[int], Result], label: str) -> None:
        outcome = generate(self.view.prompt_number_of_records())
        if isinstance(outcome, Success):
            self.view.show_message(f"Successfully generated {outcome.value} {label}.")
        else:
            self.view.show_error(outcome.error)

    def handle_analytics(self) -> None:
        while True:
            self.view.show_analytics_menu()
            selected = self.view.choice(1, 3)
            if selected == 3:
                return
            if selected == 1:
                timed = self.analytics.client_analytics(self.view.prompt_client_filter())
                show = self.view.show_client_analytics
            else:
                timed = self.analytics.courier_analytics(self.view.prompt_courier_filter())
                show = self.view.show_courier_analytics

            if isinstance(timed.value, Failure):
                self.view.show_error(timed.value.error)
                continue
            if isinstance(timed.value.value, list) and not timed.value.value:
                self.view.show_message("No matching records found.")
            else:
                show(timed.value.value)
            self.view.show_query_runtime(timed.elapsed_ms)
