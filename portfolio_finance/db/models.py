"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from portfolio_finance.infrastructure.database.base import Base

MONEY = Numeric(14, 2, asdecimal=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False, default="Cash")
    balance = Column(MONEY, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="PKR")
    color = Column(String(20), default="#3b82f6")
    is_default = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    entries = relationship("LedgerEntry", back_populates="wallet", passive_deletes=True)


class LedgerEntry(Base):
    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_id = Column(String(36), ForeignKey("wallets.id", ondelete="CASCADE"), nullable=False, index=True)
    source_type = Column(String(20), nullable=False)  # expense, income, payment, transfer
    source_id = Column(String(36), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    kind = Column(String(10), nullable=False, default="apply")  # apply, revert
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    wallet = relationship("Wallet", back_populates="entries")


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    type = Column(String(10), nullable=False)  # expense, income
    color = Column(String(20), default="#6b7280")
    icon = Column(String(50), default="fa-tag")
    created_at = Column(DateTime(timezone=True), default=utcnow)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"))
    amount = Column(MONEY, nullable=False)
    paid_amount = Column(MONEY, nullable=False, default=0)
    wallet_id = Column(String(36), ForeignKey("wallets.id"), index=True)
    payment_method = Column(String(20), nullable=False, default="Cash")
    status = Column(String(20), nullable=False, default="Paid")
    date = Column(Date, nullable=False)
    is_recurring = Column(Boolean, default=False)
    recurring_frequency = Column(String(10))
    next_due_date = Column(Date)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    wallet = relationship("Wallet")
    payment_history = relationship(
        "ExpensePayment",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpensePayment.position",
        lazy="selectin",
    )


class ExpensePayment(Base):
    __tablename__ = "expense_payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    expense_id = Column(String(36), ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    method = Column(String(20))
    wallet_id = Column(String(36))
    notes = Column(Text)

    expense = relationship("Expense", back_populates="payment_history")


class Income(Base):
    __tablename__ = "income"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    source = Column(String(200), nullable=False)
    amount = Column(MONEY, nullable=False)
    wallet_id = Column(String(36), ForeignKey("wallets.id"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"))
    date = Column(Date, nullable=False)
    notes = Column(Text)
    is_recurring = Column(Boolean, default=False)
    recurring_frequency = Column(String(10))
    next_due_date = Column(Date)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    wallet = relationship("Wallet")


class Person(Base):
    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False, default="Other")
    phone = Column(String(30))
    email = Column(String(100))
    address = Column(String(255))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    payments = relationship("Payment", back_populates="person", passive_deletes=True)


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    person_id = Column(String(36), ForeignKey("people.id"), nullable=False, index=True)
    wallet_id = Column(String(36), ForeignKey("wallets.id"), index=True)
    type = Column(String(10), nullable=False)  # send, receive
    amount = Column(MONEY, nullable=False)
    paid_amount = Column(MONEY, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="Pending")
    method = Column(String(20), nullable=False, default="Cash")
    date = Column(Date, nullable=False)
    end_date = Column(Date)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    person = relationship("Person", back_populates="payments")
    wallet = relationship("Wallet")


class Transfer(Base):
    __tablename__ = "transfers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    from_wallet_id = Column(String(36), ForeignKey("wallets.id"), nullable=False, index=True)
    to_wallet_id = Column(String(36), ForeignKey("wallets.id"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(10), nullable=False, default="info")  # info, success, warning, error
    read = Column(Boolean, nullable=False, default=False)
    link = Column(String(255))
    date = Column(DateTime(timezone=True), default=utcnow)
