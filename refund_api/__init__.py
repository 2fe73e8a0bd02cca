"""Expense refund REST backend."""
