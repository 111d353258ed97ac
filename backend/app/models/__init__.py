from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem

__all__ = ["Product", "Transaction", "TransactionItem"]
