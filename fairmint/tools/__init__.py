"""
FairMint Off-chain Tooling
"""

from fairmint.tools.allowances import (
    Allowance,
    issue_allowance,
    issue_allowances,
    write_allowance_files,
    load_allowance,
    verify_allowance,
)

__all__ = [
    "Allowance",
    "issue_allowance",
    "issue_allowances",
    "write_allowance_files",
    "load_allowance",
    "verify_allowance",
]
