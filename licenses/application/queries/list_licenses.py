"""
ListLicensesQuery.
"""
from dataclasses import dataclass


@dataclass
class ListLicensesQuery:
    """Query for every license, newest first."""
