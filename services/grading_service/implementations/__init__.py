"""Implementation classes for Grading Service protocols.

This package contains concrete implementations of the protocols defined in protocols.py:
the exam attempt lifecycle, course grade orchestration and the in-memory store.
"""
