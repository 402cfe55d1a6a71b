"""Expense domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from shopbooks.database.base import Database
from shopbooks.domain.entities import EXPENSE_CATEGORIES, CategoryTotal, Expense
from shopbooks.domain.errors import NotFoundError, ValidationError, expense_not_found
from shopbooks.domain.money import ZERO, to_positive_money
from shopbooks.domain.notifications import LoggingNotifier, Notifier, report_errors

logger = logging.getLogger(__name__)


def _check_category(category: str) -> str:
    if category not in EXPENSE_CATEGORIES:
        raise ValidationError(
            f"Unknown expense category '{category}'. Choose one of: {', '.join(EXPENSE_CATEGORIES)}"
        )
    return category


class ExpenseService:
    """Service for logging operating expenses."""

    def __init__(self, db: Database, notifier: Optional[Notifier] = None):
        """Initialize expense service.

        Args:
            db: Database instance
            notifier: Sink for user-facing messages (defaults to logging)
        """
        self.db = db
        self.notifier = notifier or LoggingNotifier()

    def create_expense(
        self,
        spent_on: date,
        description: str,
        category: str,
        amount: Union[Decimal, int, str],
    ) -> int:
        """Log an expense.

        Returns:
            Expense ID

        Raises:
            ValidationError: If the description is blank, the category unknown
                or the amount not positive
        """
        with report_errors(self.notifier, "Expense not recorded"):
            description = (description or "").strip()
            if not description:
                raise ValidationError("Expense description is required")
            _check_category(category)
            amount = to_positive_money(amount)
            expense_id = self.db.create_expense(
                spent_on=spent_on, description=description, category=category, amount=amount
            )
        logger.info("Recorded expense %s of %s in %s", expense_id, amount, category)
        self.notifier.success("Expense recorded", f"'{description}' has been logged.")
        return expense_id

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> list[Expense]:
        """List expenses, most recent first."""
        return self.db.list_expenses(start_date=start_date, end_date=end_date, category=category)

    def update_expense(
        self,
        expense_id: int,
        spent_on: Optional[date] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        amount: Optional[Union[Decimal, int, str]] = None,
    ) -> None:
        """Update the provided fields of an expense.

        Raises:
            NotFoundError: If the expense doesn't exist
            ValidationError: If a provided field is invalid
        """
        with report_errors(self.notifier, "Expense not updated"):
            if self.db.get_expense(expense_id) is None:
                raise NotFoundError(expense_not_found(expense_id))
            if description is not None:
                description = description.strip()
                if not description:
                    raise ValidationError("Expense description cannot be blank")
            if category is not None:
                _check_category(category)
            if amount is not None:
                amount = to_positive_money(amount)
            self.db.update_expense(
                expense_id,
                spent_on=spent_on,
                description=description,
                category=category,
                amount=amount,
            )
        self.notifier.success("Expense updated", f"Expense {expense_id} has been updated.")

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        with report_errors(self.notifier, "Expense not deleted"):
            if self.db.get_expense(expense_id) is None:
                raise NotFoundError(expense_not_found(expense_id))
            self.db.delete_expense(expense_id)
        self.notifier.success("Expense deleted", f"Expense {expense_id} has been removed.")

    def summarize_by_category(self) -> list[CategoryTotal]:
        """Total and count per fixed category, in category order."""
        totals = {category: ZERO for category in EXPENSE_CATEGORIES}
        counts = {category: 0 for category in EXPENSE_CATEGORIES}
        for expense in self.db.list_expenses():
            if expense.category in totals:
                totals[expense.category] += expense.amount
                counts[expense.category] += 1
        return [
            CategoryTotal(category=category, total=totals[category], count=counts[category])
            for category in EXPENSE_CATEGORIES
        ]
