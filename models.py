# models.py
# Role: SQLAlchemy ORM models for the SQL-backed transaction store.
#       Defines TransactionRecord, the persisted form of one income/expense entry.

from sqlalchemy import Column, Date, Integer, Numeric, String, Text

from db import Base


class TransactionRecord(Base):
    """
    ORM model representing a single financial transaction.

    Amounts are always non-negative; the sign is carried by ``type``
    ("income" or "expense"), never by the value itself.
    """

    __tablename__ = "transactions"

    # Insertion sequence, used to keep date ties in creation order
    seq = Column(Integer, primary_key=True, autoincrement=True)

    # Public identifier (UUID4 string), assigned by the store
    id = Column(String(36), unique=True, index=True, nullable=False)

    # "income" or "expense"
    type = Column(String(7), nullable=False, index=True)

    # Fixed-point amount with exactly 2 fractional digits
    amount = Column(Numeric(12, 2), nullable=False)

    # Free-form category tag (open set, e.g. "food", "salary")
    category = Column(String, nullable=False, index=True)

    # Calendar date of the transaction
    date = Column(Date, nullable=False, index=True)

    # Optional free-text description (NULL = absent)
    description = Column(Text, nullable=True)
