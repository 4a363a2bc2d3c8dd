from models.account import Account
from models.claim import Claim
from models.ledger import Approval, Transaction
from models.policy import Policy
from models.product import Product

__all__ = [
    "Account",
    "Approval",
    "Claim",
    "Policy",
    "Product",
    "Transaction",
]
