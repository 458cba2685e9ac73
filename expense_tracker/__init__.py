"""Expense Tracker - income/expense tracking backed by a Firestore collection."""

__version__ = "0.1.0"
