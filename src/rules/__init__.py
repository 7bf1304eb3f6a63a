# Rules package

from src.rules.approvals import check_approvals, evaluate_approvals
from src.rules.utils.owners import get_required_owners, normalize_usernames

__all__ = [
    "check_approvals",
    "evaluate_approvals",
    "get_required_owners",
    "normalize_usernames",
]
