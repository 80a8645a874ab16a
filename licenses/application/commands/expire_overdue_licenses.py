"""
ExpireOverdueLicensesCommand.

Command for the operator-run expiry sweep.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExpireOverdueLicensesCommand:
    """Command to expire every active license past its expiry."""

    current_time: Optional[int] = None
    dry_run: bool = False
