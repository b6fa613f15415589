"""Borrow token interest oracle for lending pools."""
