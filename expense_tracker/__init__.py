"""Expense tracker API package.

Holds the account, role based access control, activity log and moderation
layers of the expense tracking service.
"""
