"""
Project tracker core: customers, employees and projects with
employee-to-project assignment over async SQLAlchemy.
"""

__version__ = "0.1.0"
