from dataclasses import dataclass

from expense_tracker.utils.constants import TYPE_INCOME


@dataclass(frozen=True)
class NewTransaction:
    """A validated entry that has not been inserted into the store yet."""
    amount: float
    type: str               # 'income' | 'expense'
    category: str
    date: str               # 'YYYY-MM-DD'
    description: str
    created_at: str = ""

    def to_record(self) -> dict:
        return {
            "amount": self.amount,
            "category": self.category,
            "type": self.type,
            "date": self.date,
            "description": self.description,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    type: str               # 'income' | 'expense'
    category: str
    date: str               # 'YYYY-MM-DD'
    description: str
    created_at: str = ""

    @property
    def is_income(self) -> bool:
        return self.type == TYPE_INCOME
