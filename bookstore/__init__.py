"""Bookstore admin dashboard API."""
