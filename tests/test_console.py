"""
Tests for the console presentation layer and the session loop in main.py.

The view reads from a scripted list of answers and writes into a list, so
whole menu flows run without a terminal. Running out of answers behaves like
closing stdin.
"""

from datetime import datetime

import pytest

from console import Controller, View
from main import main
from test_fixtures import (  # noqa: F401
    analytics_service,
    backend,
    engine,
    generator_service,
    make_client,
    make_courier,
    make_order,
    record_service,
    repositories,
)


class ScriptedView(View):
    def __init__(self, *answers):
        self.answers = list(answers)
        self.output = []
        super().__init__(read=self._next_answer, write=self.output.append)

    def _next_answer(self, prompt):
        self.output.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def run_session(record_service, analytics_service, generator_service):
    def run(*answers) -> ScriptedView:
        view = ScriptedView(*answers)
        Controller(record_service, analytics_service, generator_service, view=view).run()
        return view

    return run


# =============================================================================
# RECORD FLOWS
# =============================================================================


def test_add_and_list_client(run_session, record_service):
    view = run_session(
        "1", "1", "John", "Smith", "john.smith@example.com", "1234567890",
        "2", "7", "6",
    )

    assert "Client successfully added." in view.text
    assert "john.smith@example.com" in view.text
    assert view.output[-1] == "Goodbye."
    assert len(record_service.get_all_clients()) == 1


def test_duplicate_client_is_reported_and_session_continues(run_session, record_service):
    record_service.add_client(make_client())

    view = run_session(
        "1", "1", "Jane", "Doe", "john.smith@example.com", "1234567890", "7", "6",
    )

    assert "Error! A record with this key already exists: john.smith@example.com" in view.text
    assert view.output[-1] == "Goodbye."


def test_validation_error_is_rendered(run_session):
    view = run_session("1", "1", "john", "smith", "a@b.com", "1234567890", "7", "6")

    assert "Error! Wrong name." in view.text


def test_update_client_keeps_blank_fields(run_session, record_service):
    record_service.add_client(make_client())

    view = run_session("1", "3", "john.smith@example.com", "Johnny Smith", "", "7", "6")

    assert "Client details updated successfully." in view.text
    stored = record_service.get_client("john.smith@example.com").value
    assert (stored.name, stored.phone) == ("Johnny Smith", "1234567890")


def test_update_order_blank_answers_keep_seconds(run_session, record_service):
    """
    Verifies:
    - Enter on every order field keeps the stored values
    - Dates stored with seconds come back unchanged
    """
    record_service.add_client(make_client())
    record_service.add_courier(make_courier())
    record_service.add_order(
        make_order(2, order_date="2024-02-01 12:00:30", delivery_date="2024-02-01 12:45:59")
    )

    view = run_session("4", "3", "2", "", "", "", "", "5", "6")

    assert "Order details updated successfully." in view.text
    order = record_service.get_order(2).value
    assert order.order_date == datetime(2024, 2, 1, 12, 0, 30)
    assert order.delivery_date == datetime(2024, 2, 1, 12, 45, 59)
    assert (order.rating, order.delivery_address) == (5, "Main Street 42")


def test_delete_missing_client(run_session):
    view = run_session("1", "4", "ghost@example.com", "7", "6")

    assert "Error! Record not found: 'ghost@example.com'" in view.text


def test_meal_with_unknown_order_reports_foreign_key(run_session):
    view = run_session("3", "1", "10", "42", "Pizza", "10", "300", "1", "5", "6")

    assert "Foreign key constraint violated for Order ID: 42" in view.text


def test_invalid_menu_choice_asks_again(run_session):
    view = run_session("abc", "9", "6")

    assert view.text.count("Invalid input. Please try again.") == 2
    assert view.output[-1] == "Goodbye."


def test_non_ascii_digit_menu_choice_asks_again(run_session):
    view = run_session("²", "6")

    assert view.text.count("Invalid input. Please try again.") == 1
    assert view.output[-1] == "Goodbye."


def test_end_of_input_ends_session(run_session):
    view = run_session("1")

    assert view.output[-1] == "Goodbye."


# =============================================================================
# ANALYTICS FLOWS
# =============================================================================


def test_courier_analytics_rating_out_of_range(run_session):
    view = run_session("5", "2", "2024-01-01", "6", "3", "6")

    assert "Error! Wrong rating." in view.text


def test_top_couriers_uses_default_count(run_session, record_service):
    view = run_session("2", "6", "2", "2", "5", "", "7", "6")

    assert "Successfully generated 2 couriers." in view.text
    assert "TOP 2 COURIERS WITH THE MOST ORDERS" in view.text
    assert "Query runtime:" in view.text


def test_client_with_most_orders_without_data(run_session):
    view = run_session("1", "5", "7", "6")

    assert "No clients with orders found." in view.text
    assert "Query runtime:" in view.text


# =============================================================================
# SESSION LOOP
# =============================================================================


def test_main_exits_cleanly():
    view = ScriptedView("6")

    assert main(["--database-url", "sqlite://", "--init-db"], view=view) == 0
    assert view.output[-1] == "Goodbye."


@pytest.mark.parametrize("backend_name", ["orm", "sql"])
def test_main_terminates_on_store_failure(backend_name):
    """
    Verifies:
    - A store failure (here: tables never created) is not shown as a typed error
    - The session loop stops and main returns exit status 1
    """
    view = ScriptedView("1", "2", "7", "6")

    status = main(["--database-url", "sqlite://", "--backend", backend_name], view=view)

    assert status == 1
    assert "Goodbye." not in view.output
